"""Per-user performance history and the profiles derived from it.

Metrics are stored as one JSON list per user in the key-value store,
oldest first. Profiles, trends and benchmarks are computed on demand and
never persisted.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import ValidationError

from ...platform.storage import KeyValueStore, performance_metrics_key
from ..scoring.metadata import category_label
from ..scoring.rules import BREAKDOWN_CATEGORIES
from ..scoring.schemas import DetailedScore, ScoreBreakdown
from .rules import (
    BENCHMARK_SAMPLE_SIZE,
    BENCHMARKS,
    DEFAULT_BENCHMARK_KEY,
    PERCENTILE_KEYS,
    PREFERRED_DIFFICULTY_MIN_SESSIONS,
    PREFERRED_DIFFICULTY_THRESHOLDS,
    PREFERRED_DIFFICULTY_WINDOW,
    PROFILE_MAX_ITEMS,
    PROFILE_STRENGTH_MIN_AVG,
    PROFILE_WEAKNESS_MAX_AVG,
    PROFILE_WINDOW,
    TREND_CHANGE_THRESHOLD_PCT,
)
from .schemas import (
    BenchmarkData,
    PerformanceMetrics,
    PerformanceTrend,
    SessionStats,
    TypePerformance,
    UserPerformanceProfile,
    utcnow,
)

logger = logging.getLogger(__name__)

INTERVIEW_TYPES = ("behavioral", "technical", "mixed")


def _calculate_trend(metric: str, current: float, previous: float) -> PerformanceTrend:
    change = current - previous
    change_pct = (change / previous) * 100 if previous > 0 else 0.0
    if change_pct > TREND_CHANGE_THRESHOLD_PCT:
        trend = "improving"
    elif change_pct < -TREND_CHANGE_THRESHOLD_PCT:
        trend = "declining"
    else:
        trend = "stable"
    return PerformanceTrend(
        metric=metric,
        current=current,
        previous=previous,
        trend=trend,
        change_percentage=round(change_pct, 2),
    )


def _type_performance(metrics: List[PerformanceMetrics], interview_type: str) -> TypePerformance:
    scores = [m.overall_score for m in metrics if m.interview_type == interview_type]
    if not scores:
        return TypePerformance()
    return TypePerformance(
        average_score=sum(scores) / len(scores),
        session_count=len(scores),
        best_score=max(scores),
    )


def _average_breakdown(breakdowns: List[ScoreBreakdown]) -> Dict[str, float]:
    if not breakdowns:
        return {key: 0.0 for key in BREAKDOWN_CATEGORIES}
    return {
        key: sum(getattr(b, key) for b in breakdowns) / len(breakdowns)
        for key in BREAKDOWN_CATEGORIES
    }


def _profile_strengths(breakdowns: List[ScoreBreakdown]) -> List[str]:
    averages = _average_breakdown(breakdowns)
    ranked = sorted(
        ((k, v) for k, v in averages.items() if v >= PROFILE_STRENGTH_MIN_AVG),
        key=lambda kv: kv[1],
        reverse=True,
    )
    return [category_label(k) for k, _ in ranked[:PROFILE_MAX_ITEMS]]


def _profile_weaknesses(breakdowns: List[ScoreBreakdown]) -> List[str]:
    averages = _average_breakdown(breakdowns)
    ranked = sorted(
        ((k, v) for k, v in averages.items() if v < PROFILE_WEAKNESS_MAX_AVG),
        key=lambda kv: kv[1],
    )
    return [category_label(k) for k, _ in ranked[:PROFILE_MAX_ITEMS]]


def _preferred_difficulty(metrics: List[PerformanceMetrics]) -> str:
    """Uses the last entries in storage order, not timestamp order."""
    if len(metrics) < PREFERRED_DIFFICULTY_MIN_SESSIONS:
        return "medium"
    window = metrics[-PREFERRED_DIFFICULTY_WINDOW:]
    average = sum(m.overall_score for m in window) / len(window)
    for difficulty, threshold in PREFERRED_DIFFICULTY_THRESHOLDS:
        if average >= threshold:
            return difficulty
    return "easy"


class AnalyticsService:
    def __init__(self, store: KeyValueStore, history_limit: int = 50):
        self.store = store
        self.history_limit = history_limit

    # -- storage ------------------------------------------------------------

    def store_performance_metrics(
        self,
        user_id: str,
        session_id: str,
        detailed_score: DetailedScore,
        session_stats: SessionStats,
        difficulty: str,
        interview_type: str,
        timestamp: Optional[datetime] = None,
    ) -> Optional[PerformanceMetrics]:
        """Append one session's metrics, evicting the oldest beyond the cap."""
        try:
            metrics = PerformanceMetrics(
                user_id=user_id,
                session_id=session_id,
                timestamp=timestamp or utcnow(),
                difficulty=difficulty,
                interview_type=interview_type,
                overall_score=detailed_score.overall,
                breakdown=detailed_score.breakdown,
                completion_rate=session_stats.completion_rate,
                average_response_time=session_stats.average_response_time,
                total_questions=session_stats.total_questions,
                answered_questions=session_stats.answered_questions,
            )
        except ValidationError as e:
            logger.warning("Discarding invalid performance metrics for user_id=%s: %s", user_id, e)
            return None

        existing = self.get_all_performance_metrics(user_id)
        existing.append(metrics)
        if len(existing) > self.history_limit:
            existing = existing[-self.history_limit:]

        payload = [m.model_dump(mode="json") for m in existing]
        if not self.store.set(performance_metrics_key(user_id), payload):
            logger.error("Performance metrics not persisted for user_id=%s session_id=%s", user_id, session_id)
        return metrics

    def get_all_performance_metrics(self, user_id: str) -> List[PerformanceMetrics]:
        raw = self.store.get(performance_metrics_key(user_id))
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Malformed performance metrics blob for user_id=%s", user_id)
            return []
        metrics: List[PerformanceMetrics] = []
        for item in raw:
            try:
                metrics.append(PerformanceMetrics.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed performance metrics entry for user_id=%s: %s", user_id, e)
        return metrics

    def get_recent_performance_metrics(self, user_id: str, session_count: int = 5) -> List[PerformanceMetrics]:
        """Newest first; equal timestamps keep the later-stored entry first."""
        metrics = self.get_all_performance_metrics(user_id)
        ordered = sorted(reversed(metrics), key=lambda m: m.timestamp, reverse=True)
        return ordered[:session_count]

    # -- derived views ------------------------------------------------------

    def calculate_performance_trends(self, user_id: str) -> List[PerformanceTrend]:
        recent = self.get_recent_performance_metrics(user_id, PROFILE_WINDOW)
        if len(recent) < 2:
            return []
        current, previous = recent[0], recent[1]
        trends = [_calculate_trend("overall_score", current.overall_score, previous.overall_score)]
        for key in BREAKDOWN_CATEGORIES:
            trends.append(_calculate_trend(key, getattr(current.breakdown, key), getattr(previous.breakdown, key)))
        return trends

    def generate_user_performance_profile(self, user_id: str) -> UserPerformanceProfile:
        all_metrics = self.get_all_performance_metrics(user_id)
        if not all_metrics:
            return UserPerformanceProfile(user_id=user_id)

        recent = self.get_recent_performance_metrics(user_id, PROFILE_WINDOW)
        recent_breakdowns = [m.breakdown for m in recent]

        return UserPerformanceProfile(
            user_id=user_id,
            total_sessions=len(all_metrics),
            average_overall_score=sum(m.overall_score for m in all_metrics) / len(all_metrics),
            strengths=_profile_strengths(recent_breakdowns),
            weaknesses=_profile_weaknesses(recent_breakdowns),
            preferred_difficulty=_preferred_difficulty(all_metrics),
            performance_by_type={t: _type_performance(all_metrics, t) for t in INTERVIEW_TYPES},
            recent_trends=self.calculate_performance_trends(user_id),
        )

    @staticmethod
    def get_benchmark_data(difficulty: str, interview_type: str) -> BenchmarkData:
        key = f"{difficulty}-{interview_type}"
        if key not in BENCHMARKS:
            key = DEFAULT_BENCHMARK_KEY
        averages, overall, percentiles = BENCHMARKS[key]
        bench_difficulty, bench_type = key.split("-", 1)
        return BenchmarkData(
            difficulty=bench_difficulty,
            interview_type=bench_type,
            average_scores=ScoreBreakdown(**dict(zip(BREAKDOWN_CATEGORIES, averages))),
            average_overall_score=overall,
            sample_size=BENCHMARK_SAMPLE_SIZE,
            percentiles=dict(zip(PERCENTILE_KEYS, percentiles)),
        )
