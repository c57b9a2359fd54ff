"""
Shared FastAPI dependencies. Services are built per request on top of the
request's database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .components.adaptive.engine import AdaptiveDifficultyEngine
from .components.analytics.service import AnalyticsService
from .components.scoring.weights import ScoringWeightsService
from .components.sessions.question_sets import QuestionSetService
from .components.sessions.service import PracticeSessionService
from .platform.config import settings
from .platform.database import get_db
from .platform.storage import KeyValueStore, SqlKeyValueStore


def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return SqlKeyValueStore(db)


def get_analytics(store: KeyValueStore = Depends(get_store)) -> AnalyticsService:
    return AnalyticsService(store, history_limit=settings.engine_limits.performance_history_limit)


def get_engine(
    store: KeyValueStore = Depends(get_store),
    analytics: AnalyticsService = Depends(get_analytics),
) -> AdaptiveDifficultyEngine:
    limits = settings.engine_limits
    return AdaptiveDifficultyEngine(
        analytics,
        store,
        choice_history_limit=limits.choice_history_limit,
        recent_scores_window=limits.recent_scores_window,
        successful_session_score=limits.successful_session_score,
    )


def get_question_set_service(store: KeyValueStore = Depends(get_store)) -> QuestionSetService:
    return QuestionSetService(store)


def get_weights_service(db: Session = Depends(get_db)) -> ScoringWeightsService:
    return ScoringWeightsService(db)


def get_session_service(
    store: KeyValueStore = Depends(get_store),
    analytics: AnalyticsService = Depends(get_analytics),
    engine: AdaptiveDifficultyEngine = Depends(get_engine),
    weights: ScoringWeightsService = Depends(get_weights_service),
) -> PracticeSessionService:
    return PracticeSessionService(store, analytics, engine, weights)


__all__ = [
    "get_analytics",
    "get_engine",
    "get_question_set_service",
    "get_session_service",
    "get_store",
    "get_weights_service",
]
