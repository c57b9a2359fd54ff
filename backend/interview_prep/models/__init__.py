from .kv_entry import KeyValueEntry
from .scoring_weights import UserScoringWeights

__all__ = [
    "KeyValueEntry",
    "UserScoringWeights",
]
