"""Rarity analysis of a user's skills against the population."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Optional

from antenna.engine.population import PopulationSnapshot

RAREST_SKILLS_LIMIT = 5
# Only the user's most prominent skills are paired up
PAIR_SEARCH_DEPTH = 5


@dataclass
class SkillRarity:
    skill: str
    count: int
    percentage: float


@dataclass
class SkillPairRarity:
    skill1: str
    skill2: str
    count: int
    percentage: float


def _share(count: int, total_users: int) -> float:
    if total_users <= 0:
        return 0.0
    return round(count / total_users * 100, 1)


def rank_skill_rarity(skills: list[str], population: PopulationSnapshot) -> list[SkillRarity]:
    """Every user skill with its population count, rarest first.

    A skill nobody else has on record counts as 1 (unique to the user).
    Ties keep the user's skill order.
    """
    ranked = []
    for skill in skills:
        count = population.frequency_of(skill) or 1
        ranked.append(SkillRarity(skill, count, _share(count, population.total_users)))
    ranked.sort(key=lambda s: s.count)
    return ranked


def rarest_skills(
    skills: list[str],
    population: PopulationSnapshot,
    limit: int = RAREST_SKILLS_LIMIT,
) -> list[SkillRarity]:
    return rank_skill_rarity(skills, population)[:limit]


def rarest_pair(
    skills: list[str],
    population: PopulationSnapshot,
    depth: int = PAIR_SEARCH_DEPTH,
) -> Optional[SkillPairRarity]:
    """Least common pairing among the user's top skills.

    Pairs nobody holds (zero co-occurrence) are skipped rather than
    treated as rarest. A pair must be held by fewer than all users to
    count, so a pairing everyone shares yields no result.
    """
    best: Optional[SkillPairRarity] = None
    best_count = population.total_users
    for skill_a, skill_b in combinations(skills[:depth], 2):
        count = population.co_occurrence(skill_a, skill_b)
        if count <= 0:
            continue
        if count < best_count:
            best_count = count
            best = SkillPairRarity(
                skill1=skill_a,
                skill2=skill_b,
                count=count,
                percentage=_share(count, population.total_users),
            )
    return best
