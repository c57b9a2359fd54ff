"""Pydantic models for stored session metrics and derived profiles."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Literal

from pydantic import BaseModel, Field, field_validator

from ..scoring.schemas import Difficulty, InterviewType, ScoreBreakdown

TrendDirection = Literal["improving", "declining", "stable"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStats(BaseModel):
    total_questions: int = 0
    answered_questions: int = 0
    average_response_time: float = 0.0
    completion_rate: float = 0.0


class PerformanceMetrics(BaseModel):
    user_id: str
    session_id: str
    timestamp: datetime = Field(default_factory=utcnow)
    difficulty: Difficulty
    interview_type: InterviewType
    overall_score: float
    breakdown: ScoreBreakdown
    completion_rate: float = 0.0
    average_response_time: float = 0.0
    total_questions: int = 0
    answered_questions: int = 0

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)


class PerformanceTrend(BaseModel):
    metric: str
    current: float
    previous: float
    trend: TrendDirection
    change_percentage: float


class TypePerformance(BaseModel):
    average_score: float = 0.0
    session_count: int = 0
    best_score: float = 0.0


class UserPerformanceProfile(BaseModel):
    user_id: str
    total_sessions: int = 0
    average_overall_score: float = 0.0
    strengths: List[str] = []
    weaknesses: List[str] = []
    preferred_difficulty: Difficulty = "medium"
    performance_by_type: Dict[str, TypePerformance] = Field(
        default_factory=lambda: {t: TypePerformance() for t in ("behavioral", "technical", "mixed")}
    )
    recent_trends: List[PerformanceTrend] = []
    last_updated: datetime = Field(default_factory=utcnow)


class BenchmarkData(BaseModel):
    difficulty: Difficulty
    interview_type: InterviewType
    average_scores: ScoreBreakdown
    average_overall_score: float
    sample_size: int
    percentiles: Dict[str, float]
