"""Practice session lifecycle and session completion scoring."""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Tuple

from pydantic import ValidationError

from ...platform.storage import KeyValueStore, practice_session_key, user_sessions_index_key
from ..adaptive.engine import AdaptiveDifficultyEngine
from ..adaptive.schemas import AdaptiveRecommendation, RecommendationAccuracy, SessionOutcome, UserChoice
from ..analytics.schemas import SessionStats, utcnow
from ..analytics.service import AnalyticsService
from ..scoring.rules import BREAKDOWN_CATEGORIES
from ..scoring.schemas import ScoreBreakdown, ScoringCriteria, ScoringWeights
from ..scoring.service import build_detailed_score, calculate_breakdown_scores
from ..scoring.weights import ScoringWeightsService
from .question_bank import merge_question_collections, select_questions
from .question_sets import QuestionSetService
from .schemas import (
    AdaptiveSessionParams,
    AdaptiveSessionResult,
    InterviewQuestion,
    PerformanceSummary,
    PracticeSession,
    QuestionSources,
    ResponseRecord,
    SessionCompletionResult,
    SessionCreateParams,
    SessionExport,
)
from .templates import get_template, template_questions

logger = logging.getLogger(__name__)

DEFAULT_EXPECTED_DURATION = 120.0


def _question_type_for(session_type: str) -> str:
    return "behavioral" if session_type == "mixed" else session_type


def _average_breakdowns(breakdowns: List[ScoreBreakdown]) -> ScoreBreakdown:
    return ScoreBreakdown(**{
        key: sum(getattr(b, key) for b in breakdowns) / len(breakdowns)
        for key in BREAKDOWN_CATEGORIES
    })


class PracticeSessionService:
    def __init__(
        self,
        store: KeyValueStore,
        analytics: AnalyticsService,
        engine: AdaptiveDifficultyEngine,
        weights: Optional[ScoringWeightsService] = None,
    ):
        self.store = store
        self.analytics = analytics
        self.engine = engine
        self.weights = weights
        self.question_sets = QuestionSetService(store)

    def _user_weights(self, user_id: str) -> Optional[ScoringWeights]:
        if self.weights is None:
            return None
        return self.weights.fetch_user_scoring_weights(user_id).weights

    # -- persistence --------------------------------------------------------

    def _save(self, session: PracticeSession) -> bool:
        session.updated_at = utcnow()
        ok = self.store.set(practice_session_key(session.id), session.model_dump(mode="json"))
        if not ok:
            logger.error("Practice session not persisted session_id=%s", session.id)
        return ok

    def _session_ids(self, user_id: str) -> List[str]:
        raw = self.store.get(user_sessions_index_key(user_id))
        if not isinstance(raw, list):
            return []
        return [str(s) for s in raw]

    def get_session(self, session_id: str) -> Optional[PracticeSession]:
        raw = self.store.get(practice_session_key(session_id))
        if raw is None:
            return None
        try:
            return PracticeSession.model_validate(raw)
        except ValidationError as e:
            logger.warning("Malformed practice session session_id=%s: %s", session_id, e)
            return None

    # -- lifecycle ----------------------------------------------------------

    def _resolve_questions(
        self,
        user_id: str,
        params: SessionCreateParams,
    ) -> Tuple[List[InterviewQuestion], QuestionSources]:
        """Resolve a session's questions and record where they came from.

        User sets win over the template and the template over custom
        questions; the built-in bank is the last resort. With
        ``include_default_questions`` the user's set questions are followed
        by the template's questions, or the bank's when no template applies.
        """
        sources = QuestionSources()
        set_ids = list(dict.fromkeys(sid for sid in params.user_question_set_ids if sid))
        user_questions = self.question_sets.questions_from_sets(user_id, set_ids) if set_ids else []

        template = get_template(params.template_id) if params.template_id else None
        if params.template_id and template is None:
            logger.warning("Unknown interview template template_id=%s", params.template_id)
        template_pool = template_questions(template) if template else []

        questions: List[InterviewQuestion] = []
        if user_questions:
            questions = user_questions
            sources.user_set_ids = set_ids
            if params.include_default_questions:
                fallback = template_pool or select_questions(params.type, params.difficulty)
                if fallback:
                    questions = merge_question_collections(questions, fallback)
                    sources.included_default = True
                    if template_pool:
                        sources.template_id = template.id
        elif template_pool:
            questions = template_pool
            sources.template_id = template.id

        if not questions:
            questions = list(params.custom_questions)
        if not questions:
            questions = select_questions(params.type, params.difficulty)
        return questions, sources

    def create_session(self, user_id: str, params: SessionCreateParams) -> PracticeSession:
        questions, sources = self._resolve_questions(user_id, params)
        session = PracticeSession(
            id=uuid.uuid4().hex,
            user_id=user_id,
            type=params.type,
            difficulty=params.difficulty,
            duration_minutes=params.duration_minutes,
            role=params.role,
            questions=questions,
            question_sources=sources,
        )
        self._save(session)

        ids = self._session_ids(user_id)
        ids.append(session.id)
        self.store.set(user_sessions_index_key(user_id), ids)

        logger.info(
            "Created practice session session_id=%s user_id=%s type=%s difficulty=%s questions=%d",
            session.id, user_id, session.type, session.difficulty, len(questions),
        )
        return session

    def create_adaptive_session(self, user_id: str, params: AdaptiveSessionParams) -> AdaptiveSessionResult:
        """Create a session from the engine's recommendation unless the user chose otherwise."""
        recommendation: AdaptiveRecommendation = self.engine.generate_recommendation(user_id)
        choice = params.user_choice or UserChoice(
            difficulty=recommendation.recommended_difficulty,
            type=recommendation.recommended_type,
        )
        session = self.create_session(
            user_id,
            SessionCreateParams(
                type=choice.type,
                difficulty=choice.difficulty,
                duration_minutes=params.duration_minutes,
                role=params.role,
            ),
        )
        record = self.engine.record_user_choice(user_id, recommendation, choice, timestamp=session.created_at)
        return AdaptiveSessionResult(
            session=session,
            recommendation=recommendation,
            was_recommendation_followed=record.was_recommendation_followed,
        )

    def save_response(
        self,
        session_id: str,
        question_id: str,
        response: str,
        duration_seconds: float,
    ) -> Optional[PracticeSession]:
        session = self.get_session(session_id)
        if session is None:
            logger.warning("save_response: session not found session_id=%s", session_id)
            return None

        record = ResponseRecord(question_id=question_id, response=response, duration_seconds=duration_seconds)
        for idx, existing in enumerate(session.responses):
            if existing.question_id == question_id:
                session.responses[idx] = record
                break
        else:
            session.responses.append(record)

        self._save(session)
        return session

    def update_session_status(self, session_id: str, status: str) -> Optional[PracticeSession]:
        session = self.get_session(session_id)
        if session is None:
            return None
        session.status = status
        if status == "active" and session.start_time is None:
            session.start_time = utcnow()
        elif status == "completed" and session.end_time is None:
            session.end_time = utcnow()
        self._save(session)
        return session

    def list_user_sessions(self, user_id: str) -> List[PracticeSession]:
        sessions = [s for s in (self.get_session(sid) for sid in self._session_ids(user_id)) if s is not None]
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    def get_session_stats(self, session_id: str) -> Optional[SessionStats]:
        session = self.get_session(session_id)
        if session is None:
            return None
        return self._stats(session)

    @staticmethod
    def _stats(session: PracticeSession) -> SessionStats:
        total = len(session.questions)
        answered = len(session.responses)
        total_time = sum(r.duration_seconds for r in session.responses)
        return SessionStats(
            total_questions=total,
            answered_questions=answered,
            average_response_time=total_time / answered if answered else 0.0,
            completion_rate=answered / total * 100 if total else 0.0,
        )

    def export_session(self, session_id: str) -> Optional[SessionExport]:
        session = self.get_session(session_id)
        if session is None:
            return None
        return SessionExport(session=session, responses=session.responses, stats=self._stats(session))

    def delete_session(self, session_id: str) -> bool:
        session = self.get_session(session_id)
        deleted = self.store.delete(practice_session_key(session_id))
        if session is not None:
            ids = [sid for sid in self._session_ids(session.user_id) if sid != session_id]
            self.store.set(user_sessions_index_key(session.user_id), ids)
        return deleted

    # -- completion ---------------------------------------------------------

    def complete_session(
        self,
        user_id: str,
        session_id: str,
        role: Optional[str] = None,
    ) -> Optional[SessionCompletionResult]:
        """Score every response, store the session metrics and close the session.

        The overall score uses the user's stored weights when a weights
        service is wired in. Returns None when the session does not exist,
        belongs to another user or has already been scored.
        """
        session = self.get_session(session_id)
        if session is None or session.user_id != user_id:
            return None
        if session.scored_at is not None:
            logger.warning("Session already scored session_id=%s user_id=%s", session_id, user_id)
            return None

        role = role if role is not None else session.role
        questions = {q.id: q for q in session.questions}
        breakdowns: List[ScoreBreakdown] = []
        for resp in session.responses:
            question = questions.get(resp.question_id)
            criteria = ScoringCriteria(
                question_type=question.type if question else _question_type_for(session.type),
                role=role,
                difficulty=session.difficulty,
                expected_duration=float(question.time_limit) if question and question.time_limit else DEFAULT_EXPECTED_DURATION,
            )
            breakdowns.append(calculate_breakdown_scores(
                question.question if question else "",
                resp.response,
                resp.duration_seconds,
                criteria,
            ))

        session_criteria = ScoringCriteria(
            question_type=_question_type_for(session.type),
            role=role,
            difficulty=session.difficulty,
        )
        if not breakdowns:
            # An unanswered session scores like a single empty answer.
            breakdowns.append(calculate_breakdown_scores("", "", 0.0, session_criteria))

        combined_text = "\n\n".join(r.response for r in session.responses)
        detailed = build_detailed_score(
            _average_breakdowns(breakdowns),
            combined_text,
            session_criteria,
            self._user_weights(user_id),
        )
        stats = self._stats(session)

        session.status = "completed"
        session.scored_at = utcnow()
        if session.end_time is None:
            session.end_time = session.scored_at
        self._save(session)

        self.analytics.store_performance_metrics(
            user_id,
            session.id,
            detailed,
            stats,
            difficulty=session.difficulty,
            interview_type=session.type,
        )
        self.engine.update_session_outcome(
            user_id,
            session.created_at,
            SessionOutcome(overall_score=detailed.overall, completion_rate=stats.completion_rate),
        )

        logger.info(
            "Completed practice session session_id=%s user_id=%s overall=%d level=%s",
            session.id, user_id, detailed.overall, detailed.level_assessment,
        )
        return SessionCompletionResult(session_id=session.id, detailed_score=detailed, session_stats=stats)

    # -- read models --------------------------------------------------------

    def get_adaptive_config(self, user_id: str) -> AdaptiveRecommendation:
        return self.engine.generate_recommendation(user_id)

    def get_user_performance_summary(self, user_id: str) -> PerformanceSummary:
        profile = self.analytics.generate_user_performance_profile(user_id)
        played = {t: p for t, p in profile.performance_by_type.items() if p.session_count > 0}
        best_type = max(played, key=lambda t: played[t].average_score) if played else "mixed"
        return PerformanceSummary(
            profile=profile,
            recent_trends=profile.recent_trends,
            benchmark=self.analytics.get_benchmark_data(profile.preferred_difficulty, best_type),
            best_type=best_type,
        )

    def get_recommendation_accuracy(self, user_id: str) -> RecommendationAccuracy:
        return self.engine.get_recommendation_accuracy(user_id)
