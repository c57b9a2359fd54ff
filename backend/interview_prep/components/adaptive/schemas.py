"""Pydantic models for recommendations and the choice log."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..analytics.schemas import utcnow
from ..scoring.schemas import Difficulty, InterviewType

EstimatedDifficulty = Literal["challenging", "appropriate", "comfortable"]


class Rationale(BaseModel):
    primary: str
    supporting: List[str] = []


class AlternativeOption(BaseModel):
    difficulty: Difficulty
    type: InterviewType
    reason: str


class AdaptiveRecommendation(BaseModel):
    recommended_difficulty: Difficulty
    recommended_type: InterviewType
    confidence: float = Field(ge=0.0, le=100.0)
    rationale: Rationale
    alternative_options: List[AlternativeOption] = Field(default_factory=list, max_length=2)
    focus_areas: List[str] = []
    estimated_difficulty: EstimatedDifficulty = "appropriate"


class PartialRecommendation(BaseModel):
    """What a single rule contributes; unset fields are filled in afterwards."""

    recommended_difficulty: Optional[Difficulty] = None
    recommended_type: Optional[InterviewType] = None
    rationale: Optional[Rationale] = None
    focus_areas: Optional[List[str]] = None
    estimated_difficulty: Optional[EstimatedDifficulty] = None


class UserChoice(BaseModel):
    difficulty: Difficulty
    type: InterviewType


class SessionOutcome(BaseModel):
    overall_score: float
    completion_rate: float = 0.0


class UserChoiceRecord(BaseModel):
    user_id: str
    timestamp: datetime = Field(default_factory=utcnow)
    recommendation: AdaptiveRecommendation
    user_choice: UserChoice
    was_recommendation_followed: bool
    session_outcome: Optional[SessionOutcome] = None

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)


class RecommendationAccuracy(BaseModel):
    overall_accuracy: float = 0.0
    difficulty_accuracy: float = 0.0
    type_accuracy: float = 0.0
    total_recommendations: int = 0
