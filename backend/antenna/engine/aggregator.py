"""Metrics aggregator: builds the full DNA metrics report for one user.

Loads the population once, runs every analyzer over the same snapshot and
combines the results with the scalar counts (collaborations, showcase,
journals, matches). Read-only: nothing here writes to the store.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone

import redis

from antenna.config.settings import CANDIDATE_SAMPLE_SIZE, RECENT_WINDOW_DAYS
from antenna.engine.complementary import mine_complementary
from antenna.engine.normalizer import normalize_keywords
from antenna.engine.percentile import (
    average_collaborations,
    collaboration_counts,
    collaboration_percentile,
    round_half_up,
    skill_count_percentile,
)
from antenna.engine.population import PopulationSnapshot
from antenna.engine.rarity import rarest_pair, rarest_skills
from antenna.engine.similarity import find_similar
from antenna.engine.temporal import classify_signals, dated_journals
from antenna.errors import ComputationError, InputError, NotFoundError
from antenna.models.records import (
    JournalSnapshot,
    MatchScore,
    Profile,
    ShowcaseItem,
    ShowcaseType,
)
from antenna.models.report import (
    ComplementarySkillOut,
    DnaReport,
    SignalClassificationOut,
    SimilarProfessionalOut,
    SkillComboOut,
    SkillRarityOut,
    UserMetrics,
)
from antenna.store import source_store

logger = logging.getLogger(__name__)

TOP_MATCHES = 5
HIGH_MATCH_SCORE = 90


def days_since(profile: Profile, now: datetime) -> int:
    created = profile.created_datetime
    if created is None:
        return 0
    return max(0, math.floor((now - created).total_seconds() / 86400))


def skill_growth(total_count: int, journals: list[JournalSnapshot]) -> int:
    """Keywords gained since the first dated journal; 0 without journal history."""
    dated = dated_journals(journals)
    if len(dated) < 2:
        return 0
    return total_count - len(dated[0].extracted_keywords)


def match_stats(matches: list[MatchScore]) -> tuple[int, int]:
    """(top score, number of high matches) over the user's best matches."""
    if not matches:
        return 0, 0
    top = round_half_up(matches[0].compatibility_score)
    high = sum(1 for m in matches if m.compatibility_score >= HIGH_MATCH_SCORE)
    return top, high


def showcase_counts(items: list[ShowcaseItem]) -> tuple[int, int, int]:
    """(projects, certifications, total) among visible showcase items."""
    projects = sum(1 for i in items if i.type == ShowcaseType.PROJECT)
    certs = sum(1 for i in items if i.type == ShowcaseType.CERTIFICATION)
    return projects, certs, len(items)


def compute_report(
    user_id: str,
    r: redis.Redis | None = None,
    now: datetime | None = None,
) -> DnaReport:
    """Compute the DNA metrics report for ``user_id``.

    Raises:
        InputError: ``user_id`` is missing or blank.
        NotFoundError: no profile or no keyword profile for the user.
        ComputationError: anything else failed; no partial report is returned.
    """
    if not user_id or not user_id.strip():
        raise InputError("user_id required")

    r = r or source_store._get_redis()
    now = now or datetime.now(timezone.utc)

    profile = source_store.get_profile(user_id, r)
    skill_set = source_store.get_skill_set(user_id, r)
    if profile is None:
        raise NotFoundError(user_id, "profile")
    if skill_set is None:
        raise NotFoundError(user_id, "keyword profile")

    try:
        return _build_report(user_id, profile, skill_set.total_count,
                             skill_set.keywords, r, now)
    except Exception as exc:
        logger.exception("Metrics computation failed for user %s", user_id)
        raise ComputationError(user_id, exc) from exc


def _build_report(
    user_id: str,
    profile: Profile,
    keyword_count: int,
    keywords: list,
    r: redis.Redis,
    now: datetime,
) -> DnaReport:
    total_users = source_store.count_profiles(r)
    population = PopulationSnapshot.build(source_store.get_all_skill_sets(r), total_users)
    skills = normalize_keywords(keywords)
    logger.debug("Report for %s: %d skills against %d users",
                 user_id, len(skills), total_users)

    # Standing and rarity
    percentile = skill_count_percentile(
        keyword_count, population.total_counts.values(), total_users)
    rarest = rarest_skills(skills, population)
    combo = rarest_pair(skills, population)

    # Collaborations
    collab_counts = collaboration_counts(source_store.get_accepted_collaborations(r))
    collab_count = collab_counts.get(user_id, 0)
    avg_collabs = average_collaborations(collab_counts, exclude_user=user_id)

    # Showcase, tenure, journals, matches
    projects, certs, total_showcase = showcase_counts(
        source_store.get_showcase_items(user_id, r=r))
    journals = source_store.get_journals(user_id, r)
    top_match, high_matches = match_stats(
        source_store.get_top_matches(user_id, limit=TOP_MATCHES, r=r))

    # Temporal classification and peer analysis
    classification = classify_signals(skills, journals, now=now, window_days=RECENT_WINDOW_DAYS)
    candidates = population.others(user_id, limit=CANDIDATE_SAMPLE_SIZE)
    similar = find_similar(skills, candidates)
    complementary = mine_complementary(skills, candidates)

    rarest_out = [SkillRarityOut(skill=s.skill, count=s.count, percentage=s.percentage)
                  for s in rarest]

    metrics = UserMetrics(
        keyword_count=keyword_count,
        percentile=percentile,
        rarest_skills=rarest_out,
        top_rarest_skill=rarest_out[0] if rarest_out else None,
        rarest_combo=SkillComboOut(
            skill1=combo.skill1, skill2=combo.skill2,
            count=combo.count, percentage=combo.percentage,
        ) if combo else None,
        collab_count=collab_count,
        collab_percentile=collaboration_percentile(collab_count, avg_collabs),
        avg_collabs=avg_collabs,
        project_count=projects,
        cert_count=certs,
        total_showcase=total_showcase,
        days_active=days_since(profile, now),
        journal_count=len(journals),
        top_match_score=top_match,
        high_match_count=high_matches,
        skill_growth=skill_growth(keyword_count, journals),
        signal_classification=SignalClassificationOut(
            core=classification.core,
            recent=classification.recent,
            hidden=classification.hidden,
        ),
        similar_professionals=[
            SimilarProfessionalOut(user_id=s.user_id, similarity=s.similarity,
                                   shared_skills=s.shared_skills)
            for s in similar
        ],
        complementary_skills=[
            ComplementarySkillOut(skill=c.skill, frequency=c.frequency, percentage=c.percentage)
            for c in complementary
        ],
    )
    return DnaReport(total_users=total_users, user_metrics=metrics)
