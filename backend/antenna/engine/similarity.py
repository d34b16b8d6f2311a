"""Skill-overlap similarity between a user and a sample of other users."""

from __future__ import annotations

from dataclasses import dataclass

from antenna.config.settings import SIMILARITY_THRESHOLD
from antenna.engine.percentile import round_half_up

TOP_SIMILAR = 5


@dataclass
class SimilarProfessional:
    user_id: str
    similarity: int
    shared_skills: int


def overlap_similarity(skills: list[str], other_skills: list[str]) -> tuple[float, int]:
    """Overlap percentage and shared-skill count.

    The denominator is the larger of the two skill sets, so the score is
    not symmetric when the sets differ in size.
    """
    shared = len(set(skills) & set(other_skills))
    denominator = max(len(skills), len(other_skills))
    if denominator == 0:
        return 0.0, 0
    return shared / denominator * 100, shared


def find_similar(
    skills: list[str],
    candidates: list[tuple[str, list[str]]],
    threshold: float = SIMILARITY_THRESHOLD,
    top_k: int = TOP_SIMILAR,
) -> list[SimilarProfessional]:
    """Most similar candidates at or above ``threshold``, best first."""
    scored = []
    for user_id, other_skills in candidates:
        similarity, shared = overlap_similarity(skills, other_skills)
        if similarity >= threshold:
            scored.append((similarity, user_id, shared))

    scored.sort(key=lambda s: s[0], reverse=True)
    return [
        SimilarProfessional(user_id=uid, similarity=round_half_up(sim), shared_skills=shared)
        for sim, uid, shared in scored[:top_k]
    ]
