from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from ...components.analytics.schemas import BenchmarkData, PerformanceTrend
from ...components.analytics.service import AnalyticsService
from ...components.scoring.schemas import Difficulty, InterviewType
from ...components.sessions.schemas import (
    CompleteSessionRequest,
    PerformanceResponse,
    SessionCompletionResult,
)
from ...components.sessions.service import PracticeSessionService
from ...deps import get_analytics, get_session_service

router = APIRouter(prefix="/performance", tags=["Performance"])


@router.get("", response_model=PerformanceResponse)
def get_performance(
    user_id: str = Query(..., min_length=1),
    service: PracticeSessionService = Depends(get_session_service),
):
    return PerformanceResponse(
        performance_summary=service.get_user_performance_summary(user_id),
        recommendation_accuracy=service.get_recommendation_accuracy(user_id),
    )


@router.post("", response_model=SessionCompletionResult)
def complete_session(
    data: CompleteSessionRequest,
    service: PracticeSessionService = Depends(get_session_service),
):
    result = service.complete_session(data.user_id, data.session_id, data.role)
    if result is None:
        raise HTTPException(status_code=404, detail="Session not found or could not be completed")
    return result


@router.get("/benchmarks", response_model=BenchmarkData)
def get_benchmarks(difficulty: Difficulty = "medium", interview_type: InterviewType = "behavioral"):
    return AnalyticsService.get_benchmark_data(difficulty, interview_type)


@router.get("/{user_id}/trends", response_model=List[PerformanceTrend])
def get_trends(
    user_id: str,
    analytics: AnalyticsService = Depends(get_analytics),
):
    return analytics.calculate_performance_trends(user_id)
