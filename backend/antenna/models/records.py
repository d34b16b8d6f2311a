"""Source records consumed by the metrics engine.

Redis-backed dataclasses for the data owned by upstream collaborators
(profile, keyword-profile, journal, collaboration, showcase and match stores).
The engine only reads them; the write side exists for seeding and tests.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Optional

import redis

logger = logging.getLogger(__name__)

PROFILE_PREFIX = "profile:"
PROFILES_KEY = "profiles"
KEYWORD_PROFILE_PREFIX = "keyword_profile:"
KEYWORD_PROFILES_KEY = "keyword_profiles"
JOURNAL_PREFIX = "journal:"
USER_JOURNALS_PREFIX = "journals:"
COLLAB_PREFIX = "collab:"
COLLABS_KEY = "collabs"
SHOWCASE_PREFIX = "showcase:"
MATCHES_PREFIX = "matches:"


class CollabStatus:
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ShowcaseType:
    PROJECT = "project"
    CERTIFICATION = "certification"
    RESEARCH = "research"
    PUBLICATION = "publication"
    TALK = "talk"
    COURSE = "course"
    AWARD = "award"
    PATENT = "patent"


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts a trailing ``Z``. Naive timestamps are assumed to be UTC.
    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _load_json_list(raw: Any, owner: str) -> list:
    """Decode a JSON list field, degrading to [] on bad data."""
    if isinstance(raw, list):
        return raw
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Unreadable keyword list on %s, treating as empty", owner)
        return []
    if not isinstance(value, list):
        logger.warning("Keyword list on %s is not a list, treating as empty", owner)
        return []
    return value


def _decode(data: dict) -> dict:
    return {k.decode() if isinstance(k, bytes) else k:
            v.decode() if isinstance(v, bytes) else v
            for k, v in data.items()}


@dataclass
class KeywordRecord:
    """A single extracted keyword with its metadata.

    Only ``text`` matters for analytics; the rest rides along.
    """
    text: str
    category: str = ""
    weight: float = 1.0
    sources: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "keyword": self.text,
            "category": self.category,
            "weight": self.weight,
            "sources": list(self.sources),
        }


@dataclass
class Profile:
    user_id: str
    created_at: str = ""            # ISO 8601
    full_name: str = ""

    @property
    def created_datetime(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Profile:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_redis(self, r: redis.Redis) -> None:
        r.hset(f"{PROFILE_PREFIX}{self.user_id}", mapping=self.to_dict())
        r.sadd(PROFILES_KEY, self.user_id)

    @classmethod
    def from_redis(cls, r: redis.Redis, user_id: str) -> Optional[Profile]:
        data = r.hgetall(f"{PROFILE_PREFIX}{user_id}")
        if not data:
            return None
        return cls.from_dict(_decode(data))


@dataclass
class UserSkillSet:
    """A user's keyword profile: raw keyword items plus the stored total.

    ``keywords`` holds items as the extraction step stored them (bare strings
    or keyword dicts); normalization happens in the engine.
    """
    user_id: str
    keywords: list = field(default_factory=list)
    total_count: int = 0

    def to_dict(self) -> dict:
        items = [k.to_dict() if isinstance(k, KeywordRecord) else k for k in self.keywords]
        return {
            "user_id": self.user_id,
            "keywords": json.dumps(items),
            "total_keywords": int(self.total_count),
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserSkillSet:
        user_id = data.get("user_id", "")
        try:
            total = int(data.get("total_keywords") or 0)
        except (ValueError, TypeError):
            total = 0
        return cls(
            user_id=user_id,
            keywords=_load_json_list(data.get("keywords"), f"keyword profile {user_id}"),
            total_count=total,
        )

    def to_redis(self, r: redis.Redis) -> None:
        """Replace the user's keyword profile wholesale."""
        key = f"{KEYWORD_PROFILE_PREFIX}{self.user_id}"
        existed = r.exists(key)
        r.hset(key, mapping=self.to_dict())
        if not existed:
            r.rpush(KEYWORD_PROFILES_KEY, self.user_id)

    @classmethod
    def from_redis(cls, r: redis.Redis, user_id: str) -> Optional[UserSkillSet]:
        data = r.hgetall(f"{KEYWORD_PROFILE_PREFIX}{user_id}")
        if not data:
            return None
        return cls.from_dict(_decode(data))


@dataclass
class JournalSnapshot:
    journal_id: str
    user_id: str
    created_at: str                 # ISO 8601
    extracted_keywords: list = field(default_factory=list)

    @property
    def created_datetime(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)

    def to_dict(self) -> dict:
        items = [k.to_dict() if isinstance(k, KeywordRecord) else k
                 for k in self.extracted_keywords]
        return {
            "journal_id": self.journal_id,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "extracted_keywords": json.dumps(items),
        }

    @classmethod
    def from_dict(cls, data: dict) -> JournalSnapshot:
        journal_id = data.get("journal_id", "")
        return cls(
            journal_id=journal_id,
            user_id=data.get("user_id", ""),
            created_at=data.get("created_at", ""),
            extracted_keywords=_load_json_list(
                data.get("extracted_keywords"), f"journal {journal_id}"),
        )

    def to_redis(self, r: redis.Redis) -> None:
        r.hset(f"{JOURNAL_PREFIX}{self.journal_id}", mapping=self.to_dict())
        created = self.created_datetime
        # undated journals sort after every dated one
        score = created.timestamp() if created else float("inf")
        r.zadd(f"{USER_JOURNALS_PREFIX}{self.user_id}", {self.journal_id: score})

    @classmethod
    def from_redis(cls, r: redis.Redis, journal_id: str) -> Optional[JournalSnapshot]:
        data = r.hgetall(f"{JOURNAL_PREFIX}{journal_id}")
        if not data:
            return None
        return cls.from_dict(_decode(data))


@dataclass
class CollaborationEdge:
    collab_id: str
    sender_id: str
    receiver_id: str
    status: str = CollabStatus.PENDING

    def involves(self, user_id: str) -> bool:
        return user_id in (self.sender_id, self.receiver_id)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> CollaborationEdge:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_redis(self, r: redis.Redis) -> None:
        r.hset(f"{COLLAB_PREFIX}{self.collab_id}", mapping=self.to_dict())
        r.sadd(COLLABS_KEY, self.collab_id)

    @classmethod
    def from_redis(cls, r: redis.Redis, collab_id: str) -> Optional[CollaborationEdge]:
        data = r.hgetall(f"{COLLAB_PREFIX}{collab_id}")
        if not data:
            return None
        return cls.from_dict(_decode(data))


@dataclass
class ShowcaseItem:
    item_id: str
    user_id: str
    type: str = ShowcaseType.PROJECT
    title: str = ""
    visible: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ShowcaseItem:
        data = dict(data)
        if isinstance(data.get("visible"), str):
            data["visible"] = data["visible"].lower() in ("1", "true", "yes")
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class MatchScore:
    user_id: str
    matched_user_id: str
    compatibility_score: float = 0.0
