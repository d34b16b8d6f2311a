"""Percentile ranking of a user within the population.

Two call sites with deliberately different formulas:
  - skill-count percentile: strict less-than rank over the population
  - collaboration percentile: asymmetric score around the population average
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable

from antenna.models.records import CollaborationEdge

# Collaboration percentile never claims the very top
COLLAB_PERCENTILE_CAP = 95

# Returned when there is no population to rank against
NEUTRAL_PERCENTILE = 50


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def percentile_rank(value: float, population: Iterable[float], total: int | None = None) -> int:
    """Share of the population strictly below ``value``, as 0-100.

    ``total`` overrides the denominator when the population size is known
    to differ from the number of values supplied.
    """
    values = list(population)
    n = len(values) if total is None else total
    if n <= 0:
        return NEUTRAL_PERCENTILE
    below = sum(1 for v in values if v < value)
    return round_half_up(below / n * 100)


def skill_count_percentile(user_count: int, all_counts: Iterable[int], total_users: int) -> int:
    return percentile_rank(user_count, all_counts, total=total_users)


def collaboration_counts(edges: Iterable[CollaborationEdge]) -> Counter[str]:
    """Accepted collaborations per user; each edge counts for both endpoints."""
    counts: Counter[str] = Counter()
    for edge in edges:
        counts[edge.sender_id] += 1
        counts[edge.receiver_id] += 1
    return counts


def average_collaborations(counts: Counter[str], exclude_user: str) -> int:
    """Rounded mean collaboration count over users other than ``exclude_user``.

    Only users with at least one collaboration are present in ``counts``.
    """
    others = [c for uid, c in counts.items() if uid != exclude_user]
    if not others:
        return 0
    return round_half_up(sum(others) / len(others))


def collaboration_percentile(count: int, avg: float) -> int:
    """Above average scales against twice the average, capped at 95.

    At or below average scales against the average itself, so a
    below-average user never passes the 50th percentile.
    """
    if count > avg:
        # avg may be 0 here only when count > 0
        if avg <= 0:
            return COLLAB_PERCENTILE_CAP
        return min(COLLAB_PERCENTILE_CAP, round_half_up(count / (avg * 2) * 100))
    if avg <= 0:
        return 0
    return round_half_up(count / avg * 50)
