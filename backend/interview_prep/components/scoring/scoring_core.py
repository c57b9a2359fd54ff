"""Heuristic breakdown scorer: eight 0-100 category scores for one response.

Everything here is keyword matching, regex and arithmetic. Each
``_score_*`` function is pure and deterministic for identical inputs.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from .rules import (
    BEHAVIORAL_EXAMPLES_MULTIPLIER,
    COMMUNICATION_FLOOR,
    COMPANY_NAME_PATTERN,
    CONFIDENCE_BASE,
    CONFIDENCE_FLOOR,
    CONFIDENT_PHRASES,
    DATE_DURATION_PATTERN,
    EXAMPLE_INDICATORS,
    FILLER_PENALTY_CAP,
    FILLER_PENALTY_PER_WORD,
    FILLER_WORDS,
    FLOW_WORDS,
    PROBLEM_SOLVING_KEYWORDS,
    ROLE_TECHNICAL_KEYWORDS,
    SELF_REFERENCE_TERMS,
    SEQUENCE_MARKER_PATTERN,
    SPEAKING_RATE_BANDS,
    SPEAKING_RATE_FALLBACK,
    STAR_INDICATORS,
    STOP_WORDS,
    TECHNICAL_DETAIL_BONUS,
    TECHNICAL_DETAIL_MIN_CHARS,
    TECHNICAL_NO_KEYWORDS_SCORE,
    TECHNICAL_NOT_APPLICABLE_SCORE,
    TRANSITION_WORDS,
    UNCERTAIN_PHRASES,
)
from .schemas import AIFeedback, ScoreBreakdown, ScoringCriteria

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _clamp(v: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, float(v)))


def _words(text: str) -> List[str]:
    return text.split()


def _sentences(text: str) -> List[str]:
    return [s for s in re.split(r"[.!?]+", text) if s.strip()]


def _count_phrase(text: str, phrase: str) -> int:
    """Whole-word occurrences of ``phrase`` in already lower-cased ``text``."""
    return len(re.findall(r"\b" + re.escape(phrase) + r"\b", text))


def _count_present(text: str, terms: List[str]) -> int:
    """Number of distinct ``terms`` that appear anywhere in ``text``."""
    return sum(1 for term in terms if term in text)


def _avg_sentence_words(text: str, word_count: int) -> float:
    sentences = _sentences(text)
    return word_count / len(sentences) if sentences else float("inf")


def resolve_role_keywords(role: str) -> Dict[str, float]:
    """Keyword table for a role title.

    Exact titles win; otherwise the first known title contained in
    ``role`` (case-insensitive), so "Senior Backend Engineer" resolves to
    the backend table.
    """
    if role in ROLE_TECHNICAL_KEYWORDS:
        return dict(ROLE_TECHNICAL_KEYWORDS[role])
    lowered = (role or "").lower()
    for known, table in ROLE_TECHNICAL_KEYWORDS.items():
        if known.lower() in lowered:
            return dict(table)
    return {}


# ---------------------------------------------------------------------------
# Category scorers
# ---------------------------------------------------------------------------

def _score_technical_accuracy(response: str, criteria: ScoringCriteria) -> float:
    if criteria.question_type != "technical":
        return TECHNICAL_NOT_APPLICABLE_SCORE

    keywords = resolve_role_keywords(criteria.role)
    keywords.update(criteria.keyword_weights or {})
    lowered = response.lower()

    total_weight = 0.0
    matched_weight = 0.0
    for keyword, weight in keywords.items():
        weight = max(0.0, float(weight))
        total_weight += weight
        if keyword.lower() in lowered:
            matched_weight += weight

    score = (matched_weight / total_weight) * 100 if total_weight > 0 else TECHNICAL_NO_KEYWORDS_SCORE
    if len(response) > TECHNICAL_DETAIL_MIN_CHARS:
        score += TECHNICAL_DETAIL_BONUS
    return _clamp(score)


def _speaking_rate_score(word_count: int, duration: float) -> float:
    if duration <= 0:
        return SPEAKING_RATE_FALLBACK
    rate = word_count / duration
    for lo, hi, score in SPEAKING_RATE_BANDS:
        if lo <= rate <= hi:
            return score
    return SPEAKING_RATE_FALLBACK


def _score_communication(response: str, duration: float) -> float:
    words = _words(response)
    if not words:
        return COMMUNICATION_FLOOR

    rate_score = _speaking_rate_score(len(words), duration)

    avg_words = _avg_sentence_words(response, len(words))
    coherence = 100.0 if 5 <= avg_words <= 20 else 70.0

    lowered = response.lower()
    fillers = sum(_count_phrase(lowered, f) for f in FILLER_WORDS)
    penalty = min(FILLER_PENALTY_CAP, fillers * FILLER_PENALTY_PER_WORD)

    return _clamp((rate_score + coherence) / 2 - penalty, lo=COMMUNICATION_FLOOR)


def _score_problem_solving(response: str) -> float:
    lowered = response.lower()
    present = _count_present(lowered, PROBLEM_SOLVING_KEYWORDS)
    vocabulary = min(100.0, present / len(PROBLEM_SOLVING_KEYWORDS) * 150)
    markers = len(re.findall(SEQUENCE_MARKER_PATTERN, lowered))
    sequencing = min(20.0, markers * 5.0)
    return _clamp(vocabulary + sequencing)


def _score_confidence(response: str, duration: float) -> float:
    lowered = response.lower()
    confident = sum(_count_phrase(lowered, p) for p in CONFIDENT_PHRASES)
    uncertain = sum(_count_phrase(lowered, p) for p in UNCERTAIN_PHRASES)

    if len(response) > 100:
        completeness = 20.0
    elif len(response) > 50:
        completeness = 10.0
    else:
        completeness = 0.0

    word_count = len(_words(response))
    pace = min(30.0, word_count / duration * 10) if word_count and duration > 0 else 0.0

    score = CONFIDENCE_BASE + confident * 10 - uncertain * 8 + completeness + pace
    return _clamp(score, lo=CONFIDENCE_FLOOR)


def _score_relevance(question: str, response: str) -> float:
    terms = [
        w for w in re.findall(r"[a-z0-9']+", question.lower())
        if len(w) > 3 and w not in STOP_WORDS
    ]
    lowered = response.lower()
    if terms:
        found = sum(1 for t in terms if t in lowered)
        score = found / len(terms) * 100
    else:
        score = 50.0
    if any(term in lowered for term in SELF_REFERENCE_TERMS):
        score += 10.0
    return _clamp(score)


def _score_clarity(response: str) -> float:
    words = _words(response)
    if not words:
        sentence_score = 60.0
        diversity = 0.0
    else:
        avg_words = _avg_sentence_words(response, len(words))
        if 8 <= avg_words <= 25:
            sentence_score = 100.0
        elif 5 <= avg_words <= 30:
            sentence_score = 80.0
        else:
            sentence_score = 60.0
        unique = {w.lower() for w in words}
        diversity = min(100.0, len(unique) / len(words) * 200)

    lowered = response.lower()
    transitions = sum(_count_phrase(lowered, t) for t in TRANSITION_WORDS)
    bonus = min(20.0, transitions * 5.0)
    return _clamp((sentence_score + diversity) / 2 + bonus)


def _score_structure(response: str) -> float:
    lowered = response.lower()
    star = sum(
        25.0
        for indicators in STAR_INDICATORS.values()
        if any(word in lowered for word in indicators)
    )
    flow_count = sum(_count_phrase(lowered, w) for w in FLOW_WORDS)
    flow = min(20.0, flow_count * 3.0)
    return _clamp(star + flow)


def _score_examples(response: str, question_type: str) -> float:
    lowered = response.lower()
    indicators = _count_present(lowered, EXAMPLE_INDICATORS)
    base = min(80.0, indicators * 20.0)

    details = len(re.findall(DATE_DURATION_PATTERN, lowered))
    details += len(re.findall(COMPANY_NAME_PATTERN, response))
    specificity = min(20.0, details * 5.0)

    score = base + specificity
    if question_type == "behavioral":
        score *= BEHAVIORAL_EXAMPLES_MULTIPLIER
    return _clamp(score)


# ---------------------------------------------------------------------------
# Breakdown
# ---------------------------------------------------------------------------

def compute_breakdown(
    question: str,
    response: str,
    duration: float,
    criteria: ScoringCriteria,
    ai_feedback: Optional[AIFeedback] = None,
) -> ScoreBreakdown:
    """Score a single response. Supplied AI feedback overrides four categories."""
    question = question or ""
    response = response or ""
    duration = float(duration or 0.0)

    scores: Dict[str, float] = {
        "technical_accuracy": _score_technical_accuracy(response, criteria),
        "communication_skills": _score_communication(response, duration),
        "problem_solving": _score_problem_solving(response),
        "confidence": _score_confidence(response, duration),
        "relevance": _score_relevance(question, response),
        "clarity": _score_clarity(response),
        "structure": _score_structure(response),
        "examples": _score_examples(response, criteria.question_type),
    }

    if ai_feedback is not None:
        overrides = {
            "technical_accuracy": ai_feedback.technical_accuracy,
            "communication_skills": ai_feedback.communication,
            "confidence": ai_feedback.confidence,
            "relevance": ai_feedback.relevance,
        }
        for key, value in overrides.items():
            if value is not None:
                scores[key] = _clamp(value)

    return ScoreBreakdown(**{k: round(v, 2) for k, v in scores.items()})
