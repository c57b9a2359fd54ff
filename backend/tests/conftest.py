import os
# Override DATABASE_URL before any app imports so the engine binds to SQLite
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["LOG_JSON"] = "false"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from interview_prep.components.adaptive.engine import AdaptiveDifficultyEngine
from interview_prep.components.analytics.schemas import SessionStats
from interview_prep.components.analytics.service import AnalyticsService
from interview_prep.components.scoring.schemas import DetailedScore, ImprovementPlan, ScoreBreakdown
from interview_prep.components.sessions.service import PracticeSessionService
from interview_prep.main import app
from interview_prep.models import *  # noqa: F401, F403
from interview_prep.platform.database import Base, get_db
from interview_prep.platform.storage import MemoryKeyValueStore

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_TIME = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


# ---------------------------------------------------------------------------
# In-memory service graph
# ---------------------------------------------------------------------------

@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def analytics(store):
    return AnalyticsService(store)


@pytest.fixture
def adaptive_engine(analytics, store):
    return AdaptiveDifficultyEngine(analytics, store)


@pytest.fixture
def sessions(store, analytics, adaptive_engine):
    return PracticeSessionService(store, analytics, adaptive_engine)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_breakdown(value: float = 75.0, **overrides) -> ScoreBreakdown:
    values = {
        "technical_accuracy": value,
        "communication_skills": value,
        "problem_solving": value,
        "confidence": value,
        "relevance": value,
        "clarity": value,
        "structure": value,
        "examples": value,
    }
    values.update(overrides)
    return ScoreBreakdown(**values)


def make_score(overall: int, breakdown: ScoreBreakdown | None = None) -> DetailedScore:
    return DetailedScore(
        overall=overall,
        breakdown=breakdown or make_breakdown(float(overall)),
        level_assessment="mid",
        improvement_plan=ImprovementPlan(),
    )


def record_sessions(
    analytics: AnalyticsService,
    user_id: str,
    scores: list,
    interview_type: str = "mixed",
    difficulty: str = "medium",
    breakdown: ScoreBreakdown | None = None,
) -> None:
    """Store one metrics entry per score, one minute apart, oldest first."""
    for i, overall in enumerate(scores):
        analytics.store_performance_metrics(
            user_id,
            f"session-{user_id}-{interview_type}-{i}",
            make_score(overall, breakdown),
            SessionStats(total_questions=2, answered_questions=2, average_response_time=60.0, completion_rate=100.0),
            difficulty=difficulty,
            interview_type=interview_type,
            timestamp=BASE_TIME + timedelta(minutes=i),
        )
