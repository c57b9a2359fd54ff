"""Key-value persistence for per-user blobs.

Callers depend on the ``KeyValueStore`` protocol only. Failures never
propagate: reads degrade to ``None`` and writes report ``False``.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


def performance_metrics_key(user_id: str) -> str:
    return f"performance-metrics-{user_id}"


def user_choices_key(user_id: str) -> str:
    return f"user-choices-{user_id}"


def practice_session_key(session_id: str) -> str:
    return f"practice-session-{session_id}"


def user_sessions_index_key(user_id: str) -> str:
    return f"practice-sessions-{user_id}"


def user_question_sets_key(user_id: str) -> str:
    return f"user-question-sets-{user_id}"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> bool:
        ...

    def delete(self, key: str) -> bool:
        ...


class SqlKeyValueStore:
    """``KeyValueStore`` backed by the ``kv_entries`` table."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[Any]:
        try:
            entry = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
        except SQLAlchemyError:
            logger.exception("Failed to read key=%s", key)
            self.db.rollback()
            return None
        if entry is None:
            return None
        return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any) -> bool:
        try:
            entry = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            if entry is None:
                self.db.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.exception("Failed to write key=%s", key)
            self.db.rollback()
            return False

    def delete(self, key: str) -> bool:
        try:
            deleted = self.db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
            self.db.commit()
            return bool(deleted)
        except SQLAlchemyError:
            logger.exception("Failed to delete key=%s", key)
            self.db.rollback()
            return False


class MemoryKeyValueStore:
    """Process-local store; values are deep-copied on the way in and out."""

    def __init__(self, initial: Dict[str, Any] | None = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    def get(self, key: str) -> Optional[Any]:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = copy.deepcopy(value)
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)
