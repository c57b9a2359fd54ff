"""Adaptive difficulty engine: recommendation plus choice bookkeeping."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from ...platform.storage import KeyValueStore, user_choices_key
from ..analytics.schemas import PerformanceMetrics, UserPerformanceProfile, utcnow
from ..analytics.service import AnalyticsService
from .rules import RULES, AdaptiveRule, select_rule
from .schemas import (
    AdaptiveRecommendation,
    AlternativeOption,
    PartialRecommendation,
    Rationale,
    RecommendationAccuracy,
    SessionOutcome,
    UserChoice,
    UserChoiceRecord,
)

logger = logging.getLogger(__name__)

RECENT_SCORES_WINDOW = 3
OUTCOME_MATCH_WINDOW_SECONDS = 60
SUCCESSFUL_SESSION_SCORE = 70.0

CONFIDENCE_BASE = 50.0
CONFIDENCE_PER_SESSION = 2.0
CONFIDENCE_SESSION_CAP = 20.0
CONFIDENCE_CONSISTENCY_MAX = 15.0
CONFIDENCE_RATIONALE_BONUS = 10.0


def default_recommendation() -> AdaptiveRecommendation:
    return AdaptiveRecommendation(
        recommended_difficulty="medium",
        recommended_type="mixed",
        confidence=50,
        rationale=Rationale(
            primary="Starting with a balanced approach",
            supporting=[
                "Medium difficulty provides a good baseline",
                "Mixed type covers both technical and behavioral skills",
            ],
        ),
        alternative_options=[
            AlternativeOption(difficulty="easy", type="behavioral", reason="Build confidence with behavioral questions"),
            AlternativeOption(difficulty="easy", type="technical", reason="Practice technical fundamentals"),
        ],
        focus_areas=[],
        estimated_difficulty="appropriate",
    )


def _variance(values: List[float]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def calculate_confidence(
    profile: UserPerformanceProfile,
    recent: List[PerformanceMetrics],
    partial: PartialRecommendation,
) -> float:
    confidence = CONFIDENCE_BASE
    confidence += min(CONFIDENCE_SESSION_CAP, profile.total_sessions * CONFIDENCE_PER_SESSION)
    if len(recent) >= 2:
        variance = _variance([m.overall_score for m in recent])
        confidence += max(0.0, CONFIDENCE_CONSISTENCY_MAX - variance * 2)
    if partial.rationale is not None and len(partial.rationale.supporting) >= 2:
        confidence += CONFIDENCE_RATIONALE_BONUS
    return max(0.0, min(100.0, confidence))


def generate_alternatives(difficulty: str, interview_type: str) -> List[AlternativeOption]:
    options: List[AlternativeOption] = []
    if interview_type != "behavioral":
        options.append(AlternativeOption(
            difficulty=difficulty, type="behavioral", reason="Focus on communication and soft skills",
        ))
    if interview_type != "technical":
        options.append(AlternativeOption(
            difficulty=difficulty, type="technical", reason="Focus on technical problem-solving",
        ))
    if difficulty != "easy":
        options.append(AlternativeOption(
            difficulty="easy", type=interview_type, reason="Build confidence with easier questions",
        ))
    if difficulty != "hard":
        options.append(AlternativeOption(
            difficulty="hard", type=interview_type, reason="Challenge yourself with harder questions",
        ))
    return options[:2]


def complete_recommendation(
    partial: PartialRecommendation,
    profile: UserPerformanceProfile,
    recent: List[PerformanceMetrics],
) -> AdaptiveRecommendation:
    difficulty = partial.recommended_difficulty or profile.preferred_difficulty
    interview_type = partial.recommended_type or "mixed"
    rationale = partial.rationale or Rationale(
        primary="Recommended based on your performance",
        supporting=[f"Current skill level suggests {profile.preferred_difficulty} difficulty"],
    )
    focus_areas = partial.focus_areas if partial.focus_areas is not None else profile.weaknesses[:2]
    return AdaptiveRecommendation(
        recommended_difficulty=difficulty,
        recommended_type=interview_type,
        confidence=calculate_confidence(profile, recent, partial),
        rationale=rationale,
        alternative_options=generate_alternatives(difficulty, interview_type),
        focus_areas=focus_areas,
        estimated_difficulty=partial.estimated_difficulty or "appropriate",
    )


class AdaptiveDifficultyEngine:
    def __init__(
        self,
        analytics: AnalyticsService,
        store: KeyValueStore,
        choice_history_limit: int = 100,
        recent_scores_window: int = RECENT_SCORES_WINDOW,
        successful_session_score: float = SUCCESSFUL_SESSION_SCORE,
        rules: Optional[List[AdaptiveRule]] = None,
    ):
        self.analytics = analytics
        self.store = store
        self.choice_history_limit = choice_history_limit
        self.recent_scores_window = recent_scores_window
        self.successful_session_score = successful_session_score
        self.rules = list(rules) if rules is not None else list(RULES)

    def generate_recommendation(self, user_id: str) -> AdaptiveRecommendation:
        profile = self.analytics.generate_user_performance_profile(user_id)
        if profile.total_sessions == 0:
            return default_recommendation()

        recent = self.analytics.get_recent_performance_metrics(user_id, self.recent_scores_window)
        rule = select_rule(profile, recent, self.rules)
        if rule is None:
            logger.debug("No adaptive rule matched user_id=%s", user_id)
            return default_recommendation()

        logger.info("Adaptive rule applied user_id=%s rule=%s", user_id, rule.id)
        return complete_recommendation(rule.action(profile, recent), profile, recent)

    # -- choice log ---------------------------------------------------------

    def get_user_choice_records(self, user_id: str) -> List[UserChoiceRecord]:
        raw = self.store.get(user_choices_key(user_id))
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Malformed choice log for user_id=%s", user_id)
            return []
        records: List[UserChoiceRecord] = []
        for item in raw:
            try:
                records.append(UserChoiceRecord.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed choice record for user_id=%s: %s", user_id, e)
        return records

    def _save_records(self, user_id: str, records: List[UserChoiceRecord]) -> bool:
        payload = [r.model_dump(mode="json") for r in records]
        ok = self.store.set(user_choices_key(user_id), payload)
        if not ok:
            logger.error("Choice log not persisted for user_id=%s", user_id)
        return ok

    def record_user_choice(
        self,
        user_id: str,
        recommendation: AdaptiveRecommendation,
        user_choice: UserChoice,
        timestamp: Optional[datetime] = None,
    ) -> UserChoiceRecord:
        record = UserChoiceRecord(
            user_id=user_id,
            timestamp=timestamp or utcnow(),
            recommendation=recommendation,
            user_choice=user_choice,
            was_recommendation_followed=(
                recommendation.recommended_difficulty == user_choice.difficulty
                and recommendation.recommended_type == user_choice.type
            ),
        )
        records = self.get_user_choice_records(user_id)
        records.append(record)
        if len(records) > self.choice_history_limit:
            records = records[-self.choice_history_limit:]
        self._save_records(user_id, records)
        return record

    def update_session_outcome(self, user_id: str, session_timestamp: datetime, outcome: SessionOutcome) -> bool:
        """Attach ``outcome`` to the first record made within a minute of ``session_timestamp``."""
        if session_timestamp.tzinfo is None:
            session_timestamp = session_timestamp.replace(tzinfo=timezone.utc)
        records = self.get_user_choice_records(user_id)
        for record in records:
            if abs((record.timestamp - session_timestamp).total_seconds()) < OUTCOME_MATCH_WINDOW_SECONDS:
                record.session_outcome = outcome
                return self._save_records(user_id, records)
        logger.debug("No choice record near %s for user_id=%s", session_timestamp.isoformat(), user_id)
        return False

    def get_recommendation_accuracy(self, user_id: str) -> RecommendationAccuracy:
        records = [r for r in self.get_user_choice_records(user_id) if r.session_outcome is not None]
        if not records:
            return RecommendationAccuracy()

        total = len(records)
        successful = sum(
            1 for r in records
            if r.was_recommendation_followed and r.session_outcome.overall_score >= self.successful_session_score
        )
        difficulty_matches = sum(
            1 for r in records if r.recommendation.recommended_difficulty == r.user_choice.difficulty
        )
        type_matches = sum(1 for r in records if r.recommendation.recommended_type == r.user_choice.type)
        return RecommendationAccuracy(
            overall_accuracy=successful / total * 100,
            difficulty_accuracy=difficulty_matches / total * 100,
            type_accuracy=type_matches / total * 100,
            total_recommendations=total,
        )
