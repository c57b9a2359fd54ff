"""Per-user scoring weight persistence."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models.scoring_weights import UserScoringWeights
from .rules import BREAKDOWN_CATEGORIES, DEFAULT_WEIGHTS, PRESET_WEIGHTS
from .schemas import ScoringWeights, ScoringWeightsResponse

logger = logging.getLogger(__name__)


class ScoringWeightsService:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def get_default_weights() -> ScoringWeights:
        return ScoringWeights(**DEFAULT_WEIGHTS)

    @staticmethod
    def get_preset_weights(preset_name: str) -> Optional[ScoringWeights]:
        preset = PRESET_WEIGHTS.get(preset_name)
        return ScoringWeights(**preset) if preset is not None else None

    @staticmethod
    def get_all_presets() -> Dict[str, ScoringWeights]:
        return {name: ScoringWeights(**values) for name, values in PRESET_WEIGHTS.items()}

    def _get_row(self, user_id: str) -> Optional[UserScoringWeights]:
        return self.db.query(UserScoringWeights).filter(UserScoringWeights.user_id == user_id).first()

    def fetch_user_scoring_weights(self, user_id: str) -> ScoringWeightsResponse:
        """Stored weights for ``user_id``; defaults when absent or unreadable."""
        try:
            row = self._get_row(user_id)
        except SQLAlchemyError:
            logger.exception("Failed to read scoring weights user_id=%s", user_id)
            self.db.rollback()
            row = None

        if row is None:
            return ScoringWeightsResponse(user_id=user_id, weights=self.get_default_weights(), is_default=True)

        try:
            weights = ScoringWeights(**{key: getattr(row, key) for key in BREAKDOWN_CATEGORIES})
        except ValidationError as e:
            logger.warning("Stored scoring weights invalid for user_id=%s: %s", user_id, e)
            return ScoringWeightsResponse(user_id=user_id, weights=self.get_default_weights(), is_default=True)

        return ScoringWeightsResponse(user_id=user_id, weights=weights, preset_name=row.preset_name)

    def save_scoring_weights(
        self,
        user_id: str,
        weights: ScoringWeights,
        preset_name: Optional[str] = None,
    ) -> bool:
        try:
            row = self._get_row(user_id)
            if row is None:
                row = UserScoringWeights(user_id=user_id)
                self.db.add(row)
            for key, value in weights.model_dump().items():
                setattr(row, key, value)
            row.preset_name = preset_name
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.exception("Failed to save scoring weights user_id=%s", user_id)
            self.db.rollback()
            return False

    def apply_preset(self, user_id: str, preset_name: str) -> bool:
        weights = self.get_preset_weights(preset_name)
        if weights is None:
            logger.warning("Unknown scoring preset requested: %s", preset_name)
            return False
        return self.save_scoring_weights(user_id, weights, preset_name=preset_name)

    def reset_to_defaults(self, user_id: str) -> bool:
        try:
            self.db.query(UserScoringWeights).filter(UserScoringWeights.user_id == user_id).delete()
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.exception("Failed to reset scoring weights user_id=%s", user_id)
            self.db.rollback()
            return False
