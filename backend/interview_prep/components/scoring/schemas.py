"""Pydantic models for scoring inputs and results."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .rules import BREAKDOWN_CATEGORIES, WEIGHT_SUM_TOLERANCE

QuestionType = Literal["behavioral", "technical", "situational"]
Difficulty = Literal["easy", "medium", "hard"]
InterviewType = Literal["behavioral", "technical", "mixed"]
LevelAssessment = Literal["junior", "mid", "senior", "lead"]


class ScoreBreakdown(BaseModel):
    technical_accuracy: float = 0.0
    communication_skills: float = 0.0
    problem_solving: float = 0.0
    confidence: float = 0.0
    relevance: float = 0.0
    clarity: float = 0.0
    structure: float = 0.0
    examples: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _clamp_score(cls, v):
        if v is None:
            return 0.0
        return max(0.0, min(100.0, float(v)))

    def items(self):
        return [(key, getattr(self, key)) for key in BREAKDOWN_CATEGORIES]


class ImprovementPlan(BaseModel):
    short_term: List[str] = []
    long_term: List[str] = []


class DetailedScore(BaseModel):
    overall: int
    breakdown: ScoreBreakdown
    strengths: List[str] = []
    weaknesses: List[str] = []
    recommendations: List[str] = []
    level_assessment: LevelAssessment
    improvement_plan: ImprovementPlan


class ScoringCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_type: QuestionType = "behavioral"
    role: str = ""
    difficulty: Difficulty = "medium"
    expected_duration: float = 120.0
    keyword_weights: Dict[str, float] = {}


class AIFeedback(BaseModel):
    """Feedback from an external model; accepts camelCase keys as well."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_score: Optional[float] = None
    technical_accuracy: Optional[float] = None
    communication: Optional[float] = None
    confidence: Optional[float] = None
    relevance: Optional[float] = None
    strengths: List[str] = []
    improvements: List[str] = []
    detailed_feedback: str = ""


class ScoringWeights(BaseModel):
    technical_accuracy: float = Field(ge=0.0, le=1.0)
    communication_skills: float = Field(ge=0.0, le=1.0)
    problem_solving: float = Field(ge=0.0, le=1.0)
    confidence: float = Field(ge=0.0, le=1.0)
    relevance: float = Field(ge=0.0, le=1.0)
    clarity: float = Field(ge=0.0, le=1.0)
    structure: float = Field(ge=0.0, le=1.0)
    examples: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_sum(self):
        total = sum(getattr(self, key) for key in BREAKDOWN_CATEGORIES)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"weights must sum to 1.0 (got {total:.3f})")
        return self


class ScoringWeightsResponse(BaseModel):
    user_id: str
    weights: ScoringWeights
    preset_name: Optional[str] = None
    is_default: bool = False


class EvaluateResponseRequest(BaseModel):
    question: str
    response: str
    duration_seconds: float = Field(default=0.0, ge=0.0)
    criteria: ScoringCriteria = ScoringCriteria()
    ai_feedback: Optional[AIFeedback] = None
    weights: Optional[ScoringWeights] = None
