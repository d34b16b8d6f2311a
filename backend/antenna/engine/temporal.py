"""Temporal signal classification (Johari-window style).

Buckets each current skill by when it shows up in the user's journals:

    core    in the first journal and in recent journals
    recent  not in the first journal, but in recent journals
    hidden  absent from recent journals, whatever its origin
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from antenna.config.settings import RECENT_WINDOW_DAYS
from antenna.engine.normalizer import normalize_keywords
from antenna.models.records import JournalSnapshot

logger = logging.getLogger(__name__)

BUCKET_LIMIT = 10


@dataclass
class SignalClassification:
    core: list[str] = field(default_factory=list)
    recent: list[str] = field(default_factory=list)
    hidden: list[str] = field(default_factory=list)

    def truncated(self, limit: int = BUCKET_LIMIT) -> SignalClassification:
        return SignalClassification(
            core=self.core[:limit],
            recent=self.recent[:limit],
            hidden=self.hidden[:limit],
        )


def dated_journals(journals: list[JournalSnapshot]) -> list[JournalSnapshot]:
    """Journals with a parseable timestamp, keeping their order."""
    return [j for j in journals if j.created_datetime is not None]


def core_skill_set(journals: list[JournalSnapshot]) -> set[str]:
    """Skills from the first dated journal, once there is later history to compare.

    With zero or one dated journal there is no day-one baseline distinct
    from the present, so the core set is empty.
    """
    dated = dated_journals(journals)
    if len(dated) < 2:
        return set()
    return set(normalize_keywords(dated[0].extracted_keywords))


def recent_skill_set(
    journals: list[JournalSnapshot],
    now: datetime,
    window_days: int = RECENT_WINDOW_DAYS,
) -> set[str]:
    cutoff = now - timedelta(days=window_days)
    recent: set[str] = set()
    for journal in journals:
        created = journal.created_datetime
        if created is None:
            logger.debug("Journal %s has no usable timestamp", journal.journal_id)
            continue
        if created >= cutoff:
            recent.update(normalize_keywords(journal.extracted_keywords))
    return recent


def classify_signals(
    skills: list[str],
    journals: list[JournalSnapshot],
    now: datetime | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
    limit: int = BUCKET_LIMIT,
) -> SignalClassification:
    """Partition ``skills`` into core/recent/hidden, each capped at ``limit``.

    ``journals`` must be ordered oldest first. ``skills`` are expected to be
    normalized already.
    """
    now = now or datetime.now(timezone.utc)
    core_set = core_skill_set(journals)
    recent_set = recent_skill_set(journals, now, window_days)

    result = SignalClassification()
    for skill in skills:
        if skill not in recent_set:
            result.hidden.append(skill)
        elif skill in core_set:
            result.core.append(skill)
        else:
            result.recent.append(skill)
    return result.truncated(limit)
