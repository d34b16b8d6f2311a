"""Keyword normalization: the single place raw keyword items become skills.

Every component compares skills only after passing them through
``normalize_keywords``; nothing else lowercases or unwraps keyword records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from antenna.models.records import KeywordRecord

logger = logging.getLogger(__name__)

# Fields that may carry the keyword text on a structured record, in priority order
TEXT_FIELDS = ("keyword", "name", "text")


def _raw_text(item: Any) -> Any:
    if isinstance(item, str):
        return item
    if isinstance(item, KeywordRecord):
        return item.text
    if isinstance(item, Mapping):
        for key in TEXT_FIELDS:
            if item.get(key):
                return item[key]
        return None
    for attr in TEXT_FIELDS:
        value = getattr(item, attr, None)
        if value:
            return value
    return None


def normalize_keyword(item: Any) -> str:
    """Canonical skill for a raw keyword item, or "" if it has no usable text.

    Accepts a bare string, a KeywordRecord, a mapping with a
    ``keyword``/``name``/``text`` key, or any object exposing one of those
    attributes.
    """
    text = _raw_text(item)
    if not isinstance(text, str):
        return ""
    return text.strip().lower()


def normalize_keywords(items: Iterable[Any] | None) -> list[str]:
    """Normalize a keyword sequence into distinct skills, first-seen order.

    Malformed items are dropped rather than failing the caller.
    """
    if not items:
        return []
    if isinstance(items, (str, Mapping)) or not isinstance(items, Iterable):
        logger.debug("Expected a keyword sequence, got %s", type(items).__name__)
        return []

    skills: list[str] = []
    seen: set[str] = set()
    for item in items:
        skill = normalize_keyword(item)
        if not skill:
            logger.debug("Dropping unusable keyword record: %r", item)
            continue
        if skill in seen:
            continue
        seen.add(skill)
        skills.append(skill)
    return skills
