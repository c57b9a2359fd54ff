"""Priority-ordered recommendation rules.

Each rule is a predicate over (profile, recent sessions) plus an action
producing a partial recommendation. Only the highest-priority matching
rule is applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from ..analytics.schemas import PerformanceMetrics, UserPerformanceProfile
from .schemas import PartialRecommendation, Rationale

DIFFICULTY_ORDER = ["easy", "medium", "hard"]

ADVANCE_MIN_SESSIONS = 3
ADVANCE_MIN_SCORE = 85.0
SIMPLIFY_MIN_SESSIONS = 2
SIMPLIFY_MAX_SCORE = 60.0
BALANCED_MIN_SESSIONS = 5
BALANCED_MAX_GAP = 10.0
SPECIALIZE_MIN_TYPE_SESSIONS = 3
SPECIALIZE_MIN_GAP = 15.0

TECHNICAL_WEAKNESS_LABELS = ("Technical Accuracy", "Problem Solving")
COMMUNICATION_WEAKNESS_MARKERS = ("Communication", "Clarity", "Confidence")

Condition = Callable[[UserPerformanceProfile, List[PerformanceMetrics]], bool]
Action = Callable[[UserPerformanceProfile, List[PerformanceMetrics]], PartialRecommendation]


@dataclass(frozen=True)
class AdaptiveRule:
    id: str
    name: str
    priority: int
    condition: Condition
    action: Action


def next_difficulty(current: str, direction: str) -> str:
    idx = DIFFICULTY_ORDER.index(current) if current in DIFFICULTY_ORDER else 1
    if direction == "increase":
        idx = min(idx + 1, len(DIFFICULTY_ORDER) - 1)
    else:
        idx = max(idx - 1, 0)
    return DIFFICULTY_ORDER[idx]


def recent_average(recent: List[PerformanceMetrics]) -> float:
    if not recent:
        return 0.0
    return sum(m.overall_score for m in recent) / len(recent)


def _is_communication_weakness(label: str) -> bool:
    return any(marker in label for marker in COMMUNICATION_WEAKNESS_MARKERS)


def _is_technical_weakness(label: str) -> bool:
    return "Technical" in label or "Problem Solving" in label


# -- high-performer-advance --------------------------------------------------

def _advance_condition(profile, recent):
    return (
        profile.total_sessions >= ADVANCE_MIN_SESSIONS
        and profile.average_overall_score >= ADVANCE_MIN_SCORE
        and recent_average(recent) >= ADVANCE_MIN_SCORE
    )


def _advance_action(profile, recent):
    return PartialRecommendation(
        recommended_difficulty=next_difficulty(profile.preferred_difficulty, "increase"),
        rationale=Rationale(
            primary="You're consistently performing at a high level",
            supporting=[
                f"Average score: {profile.average_overall_score:.1f}%",
                "Ready for more challenging questions",
            ],
        ),
        estimated_difficulty="challenging",
    )


# -- struggling-simplify -----------------------------------------------------

def _simplify_condition(profile, recent):
    return profile.total_sessions >= SIMPLIFY_MIN_SESSIONS and (
        profile.average_overall_score < SIMPLIFY_MAX_SCORE
        or recent_average(recent) < SIMPLIFY_MAX_SCORE
    )


def _simplify_action(profile, recent):
    return PartialRecommendation(
        recommended_difficulty=next_difficulty(profile.preferred_difficulty, "decrease"),
        rationale=Rationale(
            primary="Let's build confidence with more appropriate questions",
            supporting=["Recent scores need improvement", "Focus on mastering fundamentals"],
        ),
        estimated_difficulty="comfortable",
    )


# -- technical-weakness-focus ------------------------------------------------

def _technical_condition(profile, recent):
    return any(label in profile.weaknesses for label in TECHNICAL_WEAKNESS_LABELS)


def _technical_action(profile, recent):
    return PartialRecommendation(
        recommended_type="technical",
        focus_areas=[w for w in profile.weaknesses if _is_technical_weakness(w)],
        rationale=Rationale(
            primary="Let's strengthen your technical skills",
            supporting=[f"Improve {w}" for w in profile.weaknesses],
        ),
    )


# -- communication-weakness-focus --------------------------------------------

def _communication_condition(profile, recent):
    return any(_is_communication_weakness(w) for w in profile.weaknesses)


def _communication_action(profile, recent):
    return PartialRecommendation(
        recommended_type="behavioral",
        focus_areas=[w for w in profile.weaknesses if _is_communication_weakness(w)],
        rationale=Rationale(
            primary="Let's work on your communication skills",
            supporting=[f"Strengthen {w}" for w in profile.weaknesses],
        ),
    )


# -- balanced-approach -------------------------------------------------------

def _balanced_condition(profile, recent):
    behavioral = profile.performance_by_type["behavioral"]
    technical = profile.performance_by_type["technical"]
    return (
        profile.total_sessions >= BALANCED_MIN_SESSIONS
        and abs(behavioral.average_score - technical.average_score) < BALANCED_MAX_GAP
    )


def _balanced_action(profile, recent):
    return PartialRecommendation(
        recommended_type="mixed",
        rationale=Rationale(
            primary="You have balanced skills, let's practice both areas",
            supporting=[
                "Similar performance in behavioral and technical questions",
                "Mixed interviews provide comprehensive practice",
            ],
        ),
    )


# -- type-specialization -----------------------------------------------------

def _specialize_condition(profile, recent):
    behavioral = profile.performance_by_type["behavioral"]
    technical = profile.performance_by_type["technical"]
    return (
        behavioral.session_count >= SPECIALIZE_MIN_TYPE_SESSIONS
        and technical.session_count >= SPECIALIZE_MIN_TYPE_SESSIONS
        and abs(behavioral.average_score - technical.average_score) > SPECIALIZE_MIN_GAP
    )


def _specialize_action(profile, recent):
    behavioral = profile.performance_by_type["behavioral"]
    technical = profile.performance_by_type["technical"]
    stronger = "behavioral" if behavioral.average_score > technical.average_score else "technical"
    stronger_avg = profile.performance_by_type[stronger].average_score
    return PartialRecommendation(
        recommended_type=stronger,
        rationale=Rationale(
            primary=f"Focus on your stronger area: {stronger} questions",
            supporting=[
                f"You excel at {stronger} questions ({stronger_avg:.1f}% average)",
                "Build confidence before addressing weaker areas",
            ],
        ),
    )


RULES: List[AdaptiveRule] = [
    AdaptiveRule("high-performer-advance", "Advance high performers", 100, _advance_condition, _advance_action),
    AdaptiveRule("struggling-simplify", "Simplify for struggling users", 90, _simplify_condition, _simplify_action),
    AdaptiveRule("technical-weakness-focus", "Focus on technical weaknesses", 80, _technical_condition, _technical_action),
    AdaptiveRule(
        "communication-weakness-focus",
        "Focus on communication weaknesses",
        75,
        _communication_condition,
        _communication_action,
    ),
    AdaptiveRule("balanced-approach", "Balanced approach", 50, _balanced_condition, _balanced_action),
    AdaptiveRule("type-specialization", "Specialize in stronger area", 40, _specialize_condition, _specialize_action),
]


def select_rule(
    profile: UserPerformanceProfile,
    recent: List[PerformanceMetrics],
    rules: List[AdaptiveRule] = RULES,
):
    """Highest-priority rule whose condition holds, or None."""
    matching = [rule for rule in rules if rule.condition(profile, recent)]
    if not matching:
        return None
    return max(matching, key=lambda rule: rule.priority)
