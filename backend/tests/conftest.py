"""Shared test fixtures for the Antenna backend test suite."""

import pytest
import fakeredis
from datetime import datetime, timedelta, timezone

from antenna.engine.population import PopulationSnapshot
from antenna.models.records import JournalSnapshot, Profile, UserSkillSet
from antenna.store import source_store


# ── Redis ────────────────────────────────────────────────────────────────

@pytest.fixture
def r():
    """Fresh fakeredis instance per test (decode_responses=True like production)."""
    return fakeredis.FakeRedis(decode_responses=True)


# ── Time Freezing ───────────────────────────────────────────────────────

@pytest.fixture
def frozen_now():
    """Return a fixed 'now' datetime for deterministic tests.

    Default: 2026-02-15T12:00:00Z.
    """
    return datetime(2026, 2, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Factories ───────────────────────────────────────────────────────────

@pytest.fixture
def make_population():
    """Factory fixture: build a PopulationSnapshot from {user_id: [skills]}.

    Usage:
        pop = make_population({"u1": ["python"], "u2": ["sql"]}, total_users=10)
    """
    def _factory(skills_by_user, total_users=None):
        skill_sets = [
            UserSkillSet(user_id=uid, keywords=list(skills), total_count=len(skills))
            for uid, skills in skills_by_user.items()
        ]
        if total_users is None:
            total_users = len(skill_sets)
        return PopulationSnapshot.build(skill_sets, total_users)

    return _factory


@pytest.fixture
def make_journal(frozen_now):
    """Factory fixture: a journal created ``days_ago`` days before frozen_now."""
    _counter = 0

    def _factory(user_id, days_ago, keywords):
        nonlocal _counter
        _counter += 1
        return JournalSnapshot(
            journal_id=f"j-{_counter}",
            user_id=user_id,
            created_at=(frozen_now - timedelta(days=days_ago)).isoformat(),
            extracted_keywords=list(keywords),
        )

    return _factory


@pytest.fixture
def seed_user(r, frozen_now):
    """Factory fixture: store a profile + keyword profile for a user.

    Usage:
        seed_user("u1", ["python", {"keyword": "SQL"}], days_active=30)
    """
    def _factory(user_id, keywords, days_active=0, total_count=None, with_profile=True):
        if with_profile:
            source_store.save_profile(Profile(
                user_id=user_id,
                created_at=(frozen_now - timedelta(days=days_active)).isoformat(),
                full_name=user_id.title(),
            ), r)
        if keywords is not None:
            source_store.save_skill_set(UserSkillSet(
                user_id=user_id,
                keywords=list(keywords),
                total_count=len(keywords) if total_count is None else total_count,
            ), r)

    return _factory


@pytest.fixture
def rarity_population(seed_user):
    """Ten users: python in 8, react in 2, sql only in the subject's profile."""
    seed_user("subject", ["python", "react", "sql"], days_active=40)
    seed_user("peer-1", ["python", "react"])
    for i in range(2, 8):
        seed_user(f"peer-{i}", ["python", f"tool-{i}"])
    seed_user("peer-8", ["go"])
    seed_user("peer-9", ["rust"])
    return "subject"
