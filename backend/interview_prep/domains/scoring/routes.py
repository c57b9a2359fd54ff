from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from ...components.scoring.metadata import scoring_metadata_payload
from ...components.scoring.schemas import (
    DetailedScore,
    EvaluateResponseRequest,
    ScoringWeights,
    ScoringWeightsResponse,
)
from ...components.scoring.service import calculate_detailed_score
from ...components.scoring.weights import ScoringWeightsService
from ...deps import get_weights_service

router = APIRouter(prefix="/scoring", tags=["Scoring"])


@router.get("/metadata")
def get_scoring_metadata():
    return scoring_metadata_payload()


@router.post("/evaluate", response_model=DetailedScore)
def evaluate_response(data: EvaluateResponseRequest):
    return calculate_detailed_score(
        data.question,
        data.response,
        data.duration_seconds,
        data.criteria,
        ai_feedback=data.ai_feedback,
        weights=data.weights,
    )


@router.get("/weights/presets", response_model=Dict[str, ScoringWeights])
def list_weight_presets():
    return ScoringWeightsService.get_all_presets()


@router.get("/weights/{user_id}", response_model=ScoringWeightsResponse)
def get_user_weights(
    user_id: str,
    service: ScoringWeightsService = Depends(get_weights_service),
):
    return service.fetch_user_scoring_weights(user_id)


@router.put("/weights/{user_id}", response_model=ScoringWeightsResponse)
def save_user_weights(
    user_id: str,
    weights: ScoringWeights,
    service: ScoringWeightsService = Depends(get_weights_service),
):
    if not service.save_scoring_weights(user_id, weights):
        raise HTTPException(status_code=500, detail="Failed to save scoring weights")
    return service.fetch_user_scoring_weights(user_id)


@router.post("/weights/{user_id}/presets/{preset_name}", response_model=ScoringWeightsResponse)
def apply_weight_preset(
    user_id: str,
    preset_name: str,
    service: ScoringWeightsService = Depends(get_weights_service),
):
    if service.get_preset_weights(preset_name) is None:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {preset_name}")
    if not service.apply_preset(user_id, preset_name):
        raise HTTPException(status_code=500, detail="Failed to apply preset")
    return service.fetch_user_scoring_weights(user_id)


@router.delete("/weights/{user_id}", response_model=ScoringWeightsResponse)
def reset_user_weights(
    user_id: str,
    service: ScoringWeightsService = Depends(get_weights_service),
):
    if not service.reset_to_defaults(user_id):
        raise HTTPException(status_code=500, detail="Failed to reset scoring weights")
    return service.fetch_user_scoring_weights(user_id)
