"""Redis-backed read access to the upstream collaborator stores.

Every function takes an optional client so callers (and tests) can share one
connection; the metrics engine only ever calls the ``get_*``/``count_*``
functions. The ``save_*`` helpers are the write side used by seeding.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import redis

from antenna.config.settings import REDIS_URL
from antenna.models.records import (
    CollaborationEdge,
    CollabStatus,
    JournalSnapshot,
    MatchScore,
    Profile,
    ShowcaseItem,
    UserSkillSet,
    COLLABS_KEY,
    KEYWORD_PROFILES_KEY,
    MATCHES_PREFIX,
    PROFILES_KEY,
    SHOWCASE_PREFIX,
    USER_JOURNALS_PREFIX,
)

logger = logging.getLogger(__name__)


def _get_redis() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


# ── Profiles ─────────────────────────────────────────────────────────────

def get_profile(user_id: str, r: redis.Redis | None = None) -> Optional[Profile]:
    r = r or _get_redis()
    return Profile.from_redis(r, user_id)


def count_profiles(r: redis.Redis | None = None) -> int:
    """Total users on record (the population size)."""
    r = r or _get_redis()
    return int(r.scard(PROFILES_KEY))


def save_profile(profile: Profile, r: redis.Redis | None = None) -> None:
    r = r or _get_redis()
    profile.to_redis(r)


# ── Keyword profiles ─────────────────────────────────────────────────────

def get_skill_set(user_id: str, r: redis.Redis | None = None) -> Optional[UserSkillSet]:
    r = r or _get_redis()
    return UserSkillSet.from_redis(r, user_id)


def get_all_skill_sets(r: redis.Redis | None = None) -> list[UserSkillSet]:
    """Every keyword profile, in the store's insertion order."""
    r = r or _get_redis()
    skill_sets = []
    for uid in r.lrange(KEYWORD_PROFILES_KEY, 0, -1):
        skill_set = UserSkillSet.from_redis(r, uid)
        if skill_set:
            skill_sets.append(skill_set)
    return skill_sets


def save_skill_set(skill_set: UserSkillSet, r: redis.Redis | None = None) -> None:
    r = r or _get_redis()
    skill_set.to_redis(r)


# ── Journals ─────────────────────────────────────────────────────────────

def get_journals(user_id: str, r: redis.Redis | None = None) -> list[JournalSnapshot]:
    """A user's journal snapshots, oldest first."""
    r = r or _get_redis()
    journals = []
    for jid in r.zrange(f"{USER_JOURNALS_PREFIX}{user_id}", 0, -1):
        journal = JournalSnapshot.from_redis(r, jid)
        if journal:
            journals.append(journal)
    return journals


def save_journal(journal: JournalSnapshot, r: redis.Redis | None = None) -> None:
    r = r or _get_redis()
    journal.to_redis(r)


# ── Collaborations ───────────────────────────────────────────────────────

def get_collaborations(
    status: str | None = None,
    user_id: str | None = None,
    r: redis.Redis | None = None,
) -> list[CollaborationEdge]:
    """Collaboration edges, optionally filtered by status and by either endpoint."""
    r = r or _get_redis()
    edges = []
    for cid in r.smembers(COLLABS_KEY):
        edge = CollaborationEdge.from_redis(r, cid)
        if not edge:
            continue
        if status is not None and edge.status != status:
            continue
        if user_id is not None and not edge.involves(user_id):
            continue
        edges.append(edge)
    return edges


def get_accepted_collaborations(r: redis.Redis | None = None) -> list[CollaborationEdge]:
    return get_collaborations(status=CollabStatus.ACCEPTED, r=r)


def save_collaboration(edge: CollaborationEdge, r: redis.Redis | None = None) -> None:
    r = r or _get_redis()
    edge.to_redis(r)


# ── Showcase ─────────────────────────────────────────────────────────────

def get_showcase_items(
    user_id: str,
    visible_only: bool = True,
    r: redis.Redis | None = None,
) -> list[ShowcaseItem]:
    r = r or _get_redis()
    items = []
    for raw in r.lrange(f"{SHOWCASE_PREFIX}{user_id}", 0, -1):
        try:
            item = ShowcaseItem.from_dict(json.loads(raw))
        except (json.JSONDecodeError, TypeError) as exc:
            logger.warning("Skipping unreadable showcase item for %s: %s", user_id, exc)
            continue
        if visible_only and not item.visible:
            continue
        items.append(item)
    return items


def save_showcase_item(item: ShowcaseItem, r: redis.Redis | None = None) -> None:
    r = r or _get_redis()
    r.rpush(f"{SHOWCASE_PREFIX}{item.user_id}", json.dumps(item.to_dict()))


# ── Matches (precomputed) ────────────────────────────────────────────────

def get_top_matches(
    user_id: str,
    limit: int = 5,
    r: redis.Redis | None = None,
) -> list[MatchScore]:
    """Highest compatibility scores for a user, best first."""
    r = r or _get_redis()
    rows = r.zrevrange(f"{MATCHES_PREFIX}{user_id}", 0, limit - 1, withscores=True)
    return [
        MatchScore(user_id=user_id, matched_user_id=other, compatibility_score=float(score))
        for other, score in rows
    ]


def save_match(match: MatchScore, r: redis.Redis | None = None) -> None:
    r = r or _get_redis()
    r.zadd(
        f"{MATCHES_PREFIX}{match.user_id}",
        {match.matched_user_id: match.compatibility_score},
    )
