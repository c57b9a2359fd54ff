"""Public scoring API: breakdown, aggregation, level and feedback generation."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Union

from .metadata import (
    BRIEF_RESPONSE_WEAKNESS,
    COMPREHENSIVE_RESPONSE_STRENGTH,
    CONCRETE_EXAMPLES_STRENGTH,
    SCORING_CATEGORIES,
)
from .rules import (
    BRIEF_RESPONSE_MAX_CHARS,
    COMPREHENSIVE_RESPONSE_MIN_CHARS,
    DEFAULT_WEIGHTS,
    IMPROVEMENT_MAX_SCORE,
    LEVEL_THRESHOLDS,
    MAX_FEEDBACK_ITEMS,
    MAX_PLAN_ITEMS,
    PRESET_WEIGHTS,
    ROLE_COMPLEXITY,
    STRENGTH_MIN_SCORE,
    WEAKNESS_MAX_SCORE,
)
from .schemas import (
    AIFeedback,
    DetailedScore,
    ImprovementPlan,
    ScoreBreakdown,
    ScoringCriteria,
    ScoringWeights,
)
from .scoring_core import compute_breakdown

logger = logging.getLogger(__name__)

WeightsLike = Union[ScoringWeights, Mapping[str, float]]


def get_default_weights() -> Dict[str, float]:
    return dict(DEFAULT_WEIGHTS)


def get_preset_weights(preset_name: str) -> Optional[Dict[str, float]]:
    preset = PRESET_WEIGHTS.get(preset_name)
    return dict(preset) if preset is not None else None


def calculate_breakdown_scores(
    question: str,
    response: str,
    duration: float,
    criteria: ScoringCriteria,
    ai_feedback: Optional[AIFeedback] = None,
) -> ScoreBreakdown:
    return compute_breakdown(question, response, duration, criteria, ai_feedback)


def _weights_dict(weights: Optional[WeightsLike]) -> Dict[str, float]:
    if weights is None:
        return dict(DEFAULT_WEIGHTS)
    if isinstance(weights, ScoringWeights):
        return weights.model_dump()
    return dict(weights)


def calculate_overall_score(breakdown: ScoreBreakdown, weights: Optional[WeightsLike] = None) -> int:
    """Weighted mean of the breakdown, rounded half-up to an integer."""
    used = _weights_dict(weights)
    weighted = 0.0
    total_weight = 0.0
    for category, value in breakdown.items():
        w = float(used.get(category, 0.0))
        weighted += value * w
        total_weight += w
    if total_weight <= 0:
        return 0
    overall = weighted / total_weight
    return max(0, min(100, int(math.floor(overall + 0.5))))


def role_complexity(role: str) -> int:
    for keyword, bonus in ROLE_COMPLEXITY:
        if keyword in (role or ""):
            return bonus
    return 0


def assess_level(breakdown: ScoreBreakdown, role: str, weights: Optional[WeightsLike] = None) -> str:
    """Map overall score plus a role-seniority bonus to a level.

    Thresholds are checked highest first, so with the current table
    "lead" is never produced.
    """
    adjusted = calculate_overall_score(breakdown, weights) + role_complexity(role)
    for level, threshold in LEVEL_THRESHOLDS:
        if adjusted >= threshold:
            return level
    return "junior"


def identify_strengths(breakdown: ScoreBreakdown, response: str) -> List[str]:
    ranked = sorted(breakdown.items(), key=lambda kv: kv[1], reverse=True)
    strengths = [
        SCORING_CATEGORIES[category]["strength"]
        for category, score in ranked[:3]
        if score >= STRENGTH_MIN_SCORE
    ]
    if len(response) > COMPREHENSIVE_RESPONSE_MIN_CHARS:
        strengths.append(COMPREHENSIVE_RESPONSE_STRENGTH)
    lowered = response.lower()
    if "example" in lowered or "experience" in lowered:
        strengths.append(CONCRETE_EXAMPLES_STRENGTH)
    return strengths[:MAX_FEEDBACK_ITEMS]


def identify_weaknesses(breakdown: ScoreBreakdown, response: str) -> List[str]:
    ranked = sorted(breakdown.items(), key=lambda kv: kv[1])
    weaknesses = [
        SCORING_CATEGORIES[category]["weakness"]
        for category, score in ranked[:3]
        if score < WEAKNESS_MAX_SCORE
    ]
    if len(response) < BRIEF_RESPONSE_MAX_CHARS:
        weaknesses.append(BRIEF_RESPONSE_WEAKNESS)
    return weaknesses[:MAX_FEEDBACK_ITEMS]


def _categories_below(breakdown: ScoreBreakdown, threshold: float) -> List[str]:
    return [category for category, score in breakdown.items() if score < threshold]


def generate_recommendations(breakdown: ScoreBreakdown, criteria: ScoringCriteria) -> List[str]:
    low = _categories_below(breakdown, IMPROVEMENT_MAX_SCORE)
    return [SCORING_CATEGORIES[c]["recommendation"] for c in low][:MAX_FEEDBACK_ITEMS]


def create_improvement_plan(breakdown: ScoreBreakdown, criteria: ScoringCriteria) -> ImprovementPlan:
    scores = dict(breakdown.items())
    low = sorted(_categories_below(breakdown, IMPROVEMENT_MAX_SCORE), key=lambda c: scores[c])
    return ImprovementPlan(
        short_term=[SCORING_CATEGORIES[c]["short_term"] for c in low[:2]][:MAX_PLAN_ITEMS],
        long_term=[SCORING_CATEGORIES[c]["long_term"] for c in low][:MAX_PLAN_ITEMS],
    )


def build_detailed_score(
    breakdown: ScoreBreakdown,
    response: str,
    criteria: ScoringCriteria,
    weights: Optional[WeightsLike] = None,
) -> DetailedScore:
    """Assemble a ``DetailedScore`` from an existing breakdown."""
    return DetailedScore(
        overall=calculate_overall_score(breakdown, weights),
        breakdown=breakdown,
        strengths=identify_strengths(breakdown, response),
        weaknesses=identify_weaknesses(breakdown, response),
        recommendations=generate_recommendations(breakdown, criteria),
        level_assessment=assess_level(breakdown, criteria.role, weights),
        improvement_plan=create_improvement_plan(breakdown, criteria),
    )


def calculate_detailed_score(
    question: str,
    response: str,
    duration: float,
    criteria: ScoringCriteria,
    ai_feedback: Optional[AIFeedback] = None,
    weights: Optional[WeightsLike] = None,
) -> DetailedScore:
    breakdown = calculate_breakdown_scores(question, response, duration, criteria, ai_feedback)
    result = build_detailed_score(breakdown, response or "", criteria, weights)
    logger.debug(
        "Scored response question_type=%s role=%s overall=%d level=%s",
        criteria.question_type,
        criteria.role,
        result.overall,
        result.level_assessment,
    )
    return result
