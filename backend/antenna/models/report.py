"""Response models for the DNA metrics report.

Fields are snake_case in Python and serialize to camelCase JSON
(``report.model_dump(by_alias=True)``).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SkillRarityOut(_CamelModel):
    skill: str
    count: int
    percentage: float


class SkillComboOut(_CamelModel):
    skill1: str
    skill2: str
    count: int
    percentage: float


class SignalClassificationOut(_CamelModel):
    core: list[str] = Field(default_factory=list)
    recent: list[str] = Field(default_factory=list)
    hidden: list[str] = Field(default_factory=list)


class SimilarProfessionalOut(_CamelModel):
    user_id: str
    similarity: int
    shared_skills: int


class ComplementarySkillOut(_CamelModel):
    skill: str
    frequency: int
    percentage: int


class UserMetrics(_CamelModel):
    keyword_count: int = 0
    percentile: int = 0
    rarest_skills: list[SkillRarityOut] = Field(default_factory=list)
    top_rarest_skill: Optional[SkillRarityOut] = None
    rarest_combo: Optional[SkillComboOut] = None
    collab_count: int = 0
    collab_percentile: int = 0
    avg_collabs: int = 0
    project_count: int = 0
    cert_count: int = 0
    total_showcase: int = 0
    days_active: int = 0
    journal_count: int = 0
    top_match_score: int = 0
    high_match_count: int = 0
    skill_growth: int = 0
    signal_classification: SignalClassificationOut = Field(default_factory=SignalClassificationOut)
    similar_professionals: list[SimilarProfessionalOut] = Field(default_factory=list)
    complementary_skills: list[ComplementarySkillOut] = Field(default_factory=list)


class DnaReport(_CamelModel):
    total_users: int
    user_metrics: UserMetrics


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
