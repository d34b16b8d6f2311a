"""Error taxonomy for the metrics engine.

InputError and NotFoundError are client errors surfaced as-is.
ComputationError wraps anything unexpected raised while building a report.
"""

from __future__ import annotations


class AntennaError(Exception):
    """Base class for all engine errors."""

    status_code: int = 500


class InputError(AntennaError):
    """Missing or malformed request input (e.g. no user_id)."""

    status_code = 400


class NotFoundError(AntennaError):
    """User has no profile or no keyword profile on record."""

    status_code = 404

    def __init__(self, user_id: str, what: str = "profile"):
        super().__init__(f"No {what} found for user {user_id}")
        self.user_id = user_id
        self.what = what


class ComputationError(AntennaError):
    """Unexpected failure while computing a report."""

    status_code = 500

    def __init__(self, user_id: str, cause: BaseException):
        super().__init__(f"Failed to compute metrics for user {user_id}: {cause}")
        self.user_id = user_id
        self.cause = cause
