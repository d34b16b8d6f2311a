"""Seed Redis with a small demo population for the DNA metrics endpoint.

Run: python -m antenna.scripts.seed_demo (from backend/)
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import redis

from antenna.config.settings import REDIS_URL
from antenna.models.records import (
    CollaborationEdge,
    CollabStatus,
    JournalSnapshot,
    KeywordRecord,
    MatchScore,
    Profile,
    ShowcaseItem,
    ShowcaseType,
    UserSkillSet,
    COLLAB_PREFIX,
    COLLABS_KEY,
    JOURNAL_PREFIX,
    KEYWORD_PROFILE_PREFIX,
    KEYWORD_PROFILES_KEY,
    MATCHES_PREFIX,
    PROFILE_PREFIX,
    PROFILES_KEY,
    SHOWCASE_PREFIX,
    USER_JOURNALS_PREFIX,
)
from antenna.store import source_store

logger = logging.getLogger("seed_demo")

# user_id → (full name, days since signup, keywords in extraction order)
DEMO_USERS = {
    "user-ada": ("Ada Park", 120, ["python", "machine learning", "sql", "kafka", "rust"]),
    "user-ben": ("Ben Ortiz", 90, ["python", "react", "sql", "docker"]),
    "user-cho": ("Cho Lin", 60, ["python", "machine learning", "pytorch", "docker"]),
    "user-dev": ("Dev Rao", 45, ["java", "kafka", "spring", "sql"]),
    "user-eli": ("Eli Moss", 30, ["react", "typescript", "figma", "leading"]),
    "user-fay": ("Fay Kim", 10, ["python", "pytorch", "kafka", "machine learning"]),
}


def clear_demo(r: redis.Redis) -> None:
    """Remove all source records from Redis."""
    prefixes = (
        PROFILE_PREFIX, KEYWORD_PROFILE_PREFIX, JOURNAL_PREFIX, USER_JOURNALS_PREFIX,
        COLLAB_PREFIX, SHOWCASE_PREFIX, MATCHES_PREFIX,
    )
    for prefix in prefixes:
        for key in r.scan_iter(f"{prefix}*"):
            r.delete(key)
    r.delete(PROFILES_KEY, KEYWORD_PROFILES_KEY, COLLABS_KEY)


def seed(r: redis.Redis | None = None) -> None:
    r = r or redis.Redis.from_url(REDIS_URL, decode_responses=True)
    clear_demo(r)
    now = datetime.now(timezone.utc)

    # ── Profiles + keyword profiles ──────────────────────────────────────
    for uid, (name, age_days, keywords) in DEMO_USERS.items():
        source_store.save_profile(Profile(
            user_id=uid,
            created_at=(now - timedelta(days=age_days)).isoformat(),
            full_name=name,
        ), r)
        records = [KeywordRecord(text=k, category="skills", weight=1.0, sources=["resume"])
                   for k in keywords]
        source_store.save_skill_set(UserSkillSet(
            user_id=uid, keywords=records, total_count=len(records)), r)

    # ── Journals (Ada: one old entry, two recent) ────────────────────────
    journals = [
        JournalSnapshot("j-1", "user-ada", (now - timedelta(days=100)).isoformat(),
                        [{"keyword": "python"}, {"keyword": "sql"}]),
        JournalSnapshot("j-2", "user-ada", (now - timedelta(days=12)).isoformat(),
                        [{"keyword": "python"}, {"keyword": "kafka"}]),
        JournalSnapshot("j-3", "user-ada", (now - timedelta(days=2)).isoformat(),
                        ["machine learning"]),
    ]
    for journal in journals:
        source_store.save_journal(journal, r)

    # ── Collaborations ───────────────────────────────────────────────────
    edges = [
        CollaborationEdge("c-1", "user-ada", "user-ben", CollabStatus.ACCEPTED),
        CollaborationEdge("c-2", "user-ada", "user-cho", CollabStatus.ACCEPTED),
        CollaborationEdge("c-3", "user-dev", "user-ben", CollabStatus.ACCEPTED),
        CollaborationEdge("c-4", "user-eli", "user-ada", CollabStatus.PENDING),
    ]
    for edge in edges:
        source_store.save_collaboration(edge, r)

    # ── Showcase + matches ───────────────────────────────────────────────
    source_store.save_showcase_item(
        ShowcaseItem("s-1", "user-ada", ShowcaseType.PROJECT, "Streaming feature store"), r)
    source_store.save_showcase_item(
        ShowcaseItem("s-2", "user-ada", ShowcaseType.CERTIFICATION, "CKA"), r)
    source_store.save_showcase_item(
        ShowcaseItem("s-3", "user-ada", ShowcaseType.TALK, "Draft talk", visible=False), r)
    for other, score in (("user-fay", 94.0), ("user-cho", 91.5), ("user-ben", 72.0)):
        source_store.save_match(MatchScore("user-ada", other, score), r)

    logger.info("Seeded %d users, %d journals, %d collaborations",
                len(DEMO_USERS), len(journals), len(edges))


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    seed()
