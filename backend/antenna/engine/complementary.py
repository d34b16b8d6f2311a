"""Complementary skill mining.

Looks at other users who share at least one skill with the user and counts
the skills they have that the user does not.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from antenna.engine.percentile import round_half_up

TOP_COMPLEMENTARY = 10
# A suggestion needs at least this many distinct candidates behind it
MIN_FREQUENCY = 2

# Generic activity words that carry no signal on their own
STOPLIST = frozenset({
    "intern",
    "cleaning",
    "reporting",
    "collaborating",
    "working",
    "managing",
    "leading",
    "organizing",
})


@dataclass
class ComplementarySkill:
    skill: str
    frequency: int
    percentage: int


def mine_complementary(
    skills: list[str],
    candidates: list[tuple[str, list[str]]],
    stoplist: frozenset[str] = STOPLIST,
    top_k: int = TOP_COMPLEMENTARY,
    min_frequency: int = MIN_FREQUENCY,
) -> list[ComplementarySkill]:
    own = set(skills)
    counts: Counter[str] = Counter()
    sharing_users: set[str] = set()

    for user_id, other_skills in candidates:
        other = set(other_skills)
        if not own & other:
            continue
        sharing_users.add(user_id)
        for skill in other_skills:
            if skill in own or skill in stoplist:
                continue
            counts[skill] += 1

    denominator = len(sharing_users)
    frequent = [(skill, n) for skill, n in counts.items() if n >= min_frequency]
    frequent.sort(key=lambda item: item[1], reverse=True)

    return [
        ComplementarySkill(
            skill=skill,
            frequency=n,
            percentage=round_half_up(n / denominator * 100) if denominator else 0,
        )
        for skill, n in frequent[:top_k]
    ]
