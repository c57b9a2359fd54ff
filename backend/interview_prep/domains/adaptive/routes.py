from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ...components.adaptive.engine import AdaptiveDifficultyEngine
from ...components.adaptive.schemas import AdaptiveRecommendation, SessionOutcome, UserChoice
from ...deps import get_engine

router = APIRouter(prefix="/adaptive-config", tags=["Adaptive"])


class RecordChoiceRequest(BaseModel):
    user_id: str
    user_choice: Optional[UserChoice] = None


class RecordChoiceResponse(BaseModel):
    recommendation: AdaptiveRecommendation
    recorded: bool


class SessionOutcomeRequest(BaseModel):
    user_id: str
    session_timestamp: datetime
    outcome: SessionOutcome


@router.get("", response_model=AdaptiveRecommendation)
def get_adaptive_config(
    user_id: str = Query(..., min_length=1),
    engine: AdaptiveDifficultyEngine = Depends(get_engine),
):
    return engine.generate_recommendation(user_id)


@router.post("", response_model=RecordChoiceResponse)
def record_choice(
    data: RecordChoiceRequest,
    engine: AdaptiveDifficultyEngine = Depends(get_engine),
):
    recommendation = engine.generate_recommendation(data.user_id)
    if data.user_choice is not None:
        engine.record_user_choice(data.user_id, recommendation, data.user_choice)
    return RecordChoiceResponse(recommendation=recommendation, recorded=data.user_choice is not None)


@router.post("/outcome")
def record_outcome(
    data: SessionOutcomeRequest,
    engine: AdaptiveDifficultyEngine = Depends(get_engine),
):
    updated = engine.update_session_outcome(data.user_id, data.session_timestamp, data.outcome)
    return {"updated": updated}
