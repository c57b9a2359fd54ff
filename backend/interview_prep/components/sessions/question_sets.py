"""User-authored question sets, stored as one list per user."""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from pydantic import ValidationError

from ...platform.storage import KeyValueStore, user_question_sets_key
from ..analytics.schemas import utcnow
from .question_bank import merge_question_collections
from .schemas import InterviewQuestion, QuestionSetParams, UserQuestionSet

logger = logging.getLogger(__name__)


def _normalize_questions(set_id: str, params: QuestionSetParams) -> List[InterviewQuestion]:
    # Questions without tags inherit the set's tags.
    return [
        q.model_copy(deep=True, update={
            "origin": "user",
            "set_id": set_id,
            "tags": list(q.tags or params.tags),
        })
        for q in params.questions
    ]


class QuestionSetService:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def list_sets(self, user_id: str) -> List[UserQuestionSet]:
        raw = self.store.get(user_question_sets_key(user_id))
        if not isinstance(raw, list):
            return []
        sets: List[UserQuestionSet] = []
        for entry in raw:
            try:
                sets.append(UserQuestionSet.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping malformed question set user_id=%s: %s", user_id, e)
        return sets

    def _write(self, user_id: str, sets: List[UserQuestionSet]) -> bool:
        ok = self.store.set(user_question_sets_key(user_id), [s.model_dump(mode="json") for s in sets])
        if not ok:
            logger.error("Question sets not persisted user_id=%s", user_id)
        return ok

    def get_set(self, user_id: str, set_id: str) -> Optional[UserQuestionSet]:
        for question_set in self.list_sets(user_id):
            if question_set.id == set_id:
                return question_set
        return None

    def save_set(
        self,
        user_id: str,
        params: QuestionSetParams,
        set_id: Optional[str] = None,
    ) -> Optional[UserQuestionSet]:
        """Create a set, or replace the set ``set_id`` keeping its creation time.

        Returns None when ``set_id`` is given but unknown, or the write fails.
        """
        sets = self.list_sets(user_id)
        existing = next((s for s in sets if s.id == set_id), None) if set_id else None
        if set_id and existing is None:
            return None

        now = utcnow()
        new_id = existing.id if existing else uuid.uuid4().hex
        question_set = UserQuestionSet(
            id=new_id,
            user_id=user_id,
            title=params.title,
            industry=params.industry,
            tags=list(params.tags),
            difficulty=params.difficulty,
            questions=_normalize_questions(new_id, params),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        if existing:
            sets = [question_set if s.id == new_id else s for s in sets]
        else:
            sets.append(question_set)

        if not self._write(user_id, sets):
            return None
        logger.info(
            "Saved question set set_id=%s user_id=%s questions=%d",
            new_id, user_id, len(question_set.questions),
        )
        return question_set

    def delete_set(self, user_id: str, set_id: str) -> bool:
        sets = self.list_sets(user_id)
        remaining = [s for s in sets if s.id != set_id]
        if len(remaining) == len(sets):
            return False
        return self._write(user_id, remaining)

    def questions_from_sets(self, user_id: str, set_ids: List[str]) -> List[InterviewQuestion]:
        """Questions of the named sets in the order given, each question id once."""
        by_id = {s.id: s for s in self.list_sets(user_id)}
        questions: List[InterviewQuestion] = []
        for set_id in dict.fromkeys(sid for sid in set_ids if sid):
            question_set = by_id.get(set_id)
            if question_set is None:
                logger.warning("Unknown question set set_id=%s user_id=%s", set_id, user_id)
                continue
            questions = merge_question_collections(questions, question_set.questions)
        return questions
