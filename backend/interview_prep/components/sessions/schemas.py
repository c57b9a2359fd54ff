"""Pydantic models for practice sessions and their API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..adaptive.schemas import AdaptiveRecommendation, RecommendationAccuracy, UserChoice
from ..analytics.schemas import (
    BenchmarkData,
    PerformanceTrend,
    SessionStats,
    UserPerformanceProfile,
    utcnow,
)
from ..scoring.schemas import DetailedScore, Difficulty, InterviewType, QuestionType

SessionStatus = Literal["setup", "active", "paused", "completed"]
QuestionOrigin = Literal["default", "template", "user", "custom"]
SetDifficulty = Literal["easy", "medium", "hard", "mixed"]
Seniority = Literal["entry", "mid", "senior"]


class InterviewQuestion(BaseModel):
    id: str
    type: QuestionType
    difficulty: Difficulty
    question: str
    follow_up: List[str] = []
    time_limit: Optional[int] = None
    origin: Optional[QuestionOrigin] = None
    set_id: Optional[str] = None
    tags: List[str] = []


class InterviewTemplate(BaseModel):
    id: str
    name: str
    description: str
    role: str
    industry: Optional[str] = None
    category: InterviewType
    difficulty: Difficulty
    duration_minutes: int = Field(gt=0)
    seniority: Seniority
    questions: List[InterviewQuestion] = Field(min_length=1)


class QuestionSetParams(BaseModel):
    title: str = Field(min_length=1)
    industry: Optional[str] = None
    tags: List[str] = []
    difficulty: SetDifficulty = "medium"
    questions: List[InterviewQuestion] = []


class CreateQuestionSetRequest(QuestionSetParams):
    user_id: str


class UserQuestionSet(QuestionSetParams):
    id: str
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class QuestionSources(BaseModel):
    """Where a session's questions came from."""

    user_set_ids: List[str] = []
    included_default: bool = False
    template_id: Optional[str] = None


class ResponseRecord(BaseModel):
    question_id: str
    response: str = ""
    duration_seconds: float = Field(default=0.0, ge=0.0)
    timestamp: datetime = Field(default_factory=utcnow)


class PracticeSession(BaseModel):
    id: str
    user_id: str
    type: InterviewType
    difficulty: Difficulty
    duration_minutes: int = 30
    role: str = ""
    questions: List[InterviewQuestion] = []
    question_sources: QuestionSources = Field(default_factory=QuestionSources)
    responses: List[ResponseRecord] = []
    current_question_index: int = 0
    status: SessionStatus = "setup"
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    # Set once by completion scoring; a scored session is never scored again.
    scored_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class SessionCreateParams(BaseModel):
    type: InterviewType = "mixed"
    difficulty: Difficulty = "medium"
    duration_minutes: int = Field(default=30, gt=0)
    role: str = ""
    custom_questions: List[InterviewQuestion] = []
    template_id: Optional[str] = None
    user_question_set_ids: List[str] = []
    include_default_questions: bool = False


class AdaptiveSessionParams(BaseModel):
    duration_minutes: int = Field(default=30, gt=0)
    role: str = ""
    user_choice: Optional[UserChoice] = None


class CreateSessionRequest(SessionCreateParams):
    user_id: str


class CreateAdaptiveSessionRequest(AdaptiveSessionParams):
    user_id: str


class SaveResponseRequest(BaseModel):
    question_id: str
    response: str = ""
    duration_seconds: float = Field(default=0.0, ge=0.0)


class StatusUpdateRequest(BaseModel):
    status: SessionStatus


class AdaptiveSessionResult(BaseModel):
    session: PracticeSession
    recommendation: AdaptiveRecommendation
    was_recommendation_followed: bool


class SessionCompletionResult(BaseModel):
    session_id: str
    detailed_score: DetailedScore
    session_stats: SessionStats


class CompleteSessionRequest(BaseModel):
    user_id: str
    session_id: str
    role: Optional[str] = None


class PerformanceSummary(BaseModel):
    profile: UserPerformanceProfile
    recent_trends: List[PerformanceTrend] = []
    benchmark: BenchmarkData
    best_type: InterviewType


class PerformanceResponse(BaseModel):
    performance_summary: PerformanceSummary
    recommendation_accuracy: RecommendationAccuracy


class SessionExport(BaseModel):
    session: PracticeSession
    responses: List[ResponseRecord]
    stats: SessionStats
    exported_at: datetime = Field(default_factory=utcnow)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
