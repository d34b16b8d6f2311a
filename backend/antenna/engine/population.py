"""Population index: one snapshot of every user's skills per report.

All population-wide scans go through ``PopulationSnapshot`` so analyzers
never touch the store directly.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from antenna.engine.normalizer import normalize_keywords
from antenna.models.records import UserSkillSet


@dataclass
class PopulationSnapshot:
    """Normalized skill sets for the whole population, in store order.

    ``total_users`` is the population size used as the denominator for
    percentages; it counts profiles, which may exceed the number of users
    with a keyword profile.
    """

    skills_by_user: dict[str, list[str]] = field(default_factory=dict)
    total_counts: dict[str, int] = field(default_factory=dict)
    total_users: int = 0

    def __post_init__(self) -> None:
        self._sets: dict[str, frozenset[str]] = {
            uid: frozenset(skills) for uid, skills in self.skills_by_user.items()
        }
        # User-level counts: each user contributes a skill at most once
        self._frequency: Counter[str] = Counter()
        for skills in self._sets.values():
            self._frequency.update(skills)

    @classmethod
    def build(cls, skill_sets: list[UserSkillSet], total_users: int) -> PopulationSnapshot:
        skills_by_user: dict[str, list[str]] = {}
        total_counts: dict[str, int] = {}
        for skill_set in skill_sets:
            skills_by_user[skill_set.user_id] = normalize_keywords(skill_set.keywords)
            total_counts[skill_set.user_id] = skill_set.total_count
        return cls(
            skills_by_user=skills_by_user,
            total_counts=total_counts,
            total_users=total_users,
        )

    def frequency_of(self, skill: str) -> int:
        return self._frequency.get(skill, 0)

    def co_occurrence(self, skill_a: str, skill_b: str) -> int:
        """Number of users having both skills. Scans the population each call."""
        return sum(
            1 for skills in self._sets.values()
            if skill_a in skills and skill_b in skills
        )

    def others(self, user_id: str, limit: int | None = None) -> list[tuple[str, list[str]]]:
        """Other users' skills in store order, capped at ``limit`` users."""
        result = [
            (uid, skills) for uid, skills in self.skills_by_user.items() if uid != user_id
        ]
        if limit is not None:
            result = result[:limit]
        return result
