"""Single source of truth for scoring categories and their feedback text."""

from __future__ import annotations

from typing import Any, Dict

from .rules import BREAKDOWN_CATEGORIES, DEFAULT_WEIGHTS, LEVEL_THRESHOLDS, PRESET_WEIGHTS

SCORING_CATEGORIES: Dict[str, Dict[str, str]] = {
    "technical_accuracy": {
        "label": "Technical Accuracy",
        "description": "Weighted coverage of role-specific technical vocabulary. Non-technical questions score 100.",
        "strength": "Demonstrates strong technical knowledge and accuracy",
        "weakness": "Could improve technical depth and accuracy",
        "recommendation": "Study core technical concepts and practice explaining complex topics clearly",
        "short_term": "Review fundamental concepts for 30 minutes daily",
        "long_term": "Take advanced courses or certifications in your field",
    },
    "communication_skills": {
        "label": "Communication Skills",
        "description": "Speaking rate, sentence length, and filler-word usage.",
        "strength": "Excellent communication and articulation skills",
        "weakness": "Needs to work on communication clarity and flow",
        "recommendation": "Practice speaking aloud and focus on pace, clarity, and eliminating filler words",
        "short_term": "Practice speaking responses aloud for 15 minutes daily",
        "long_term": "Join Toastmasters or take a public speaking course",
    },
    "problem_solving": {
        "label": "Problem Solving",
        "description": "Analytical vocabulary and explicit sequencing of steps.",
        "strength": "Shows strong analytical and problem-solving abilities",
        "weakness": "Should develop stronger problem-solving approach",
        "recommendation": 'Use structured problem-solving frameworks like "Define-Analyze-Solve-Validate"',
        "short_term": "Solve one practice problem using structured approach daily",
        "long_term": "Practice whiteboard problems and case studies regularly",
    },
    "confidence": {
        "label": "Confidence",
        "description": "Assertive versus hedging phrases, completeness, and delivery pace.",
        "strength": "Displays confidence and conviction in responses",
        "weakness": "Could benefit from more confident delivery",
        "recommendation": "Practice responses out loud and work on positive body language and tone",
        "short_term": "Record yourself answering questions and review for improvement",
        "long_term": "Seek speaking opportunities and practice presentations",
    },
    "relevance": {
        "label": "Relevance",
        "description": "Overlap between the question's key terms and the response.",
        "strength": "Provides highly relevant and on-topic answers",
        "weakness": "Should focus more on directly addressing the question",
        "recommendation": "Listen carefully to questions and create mental outlines before responding",
        "short_term": "Practice listening to questions twice before responding",
        "long_term": "Study job descriptions and common interview questions for your role",
    },
    "clarity": {
        "label": "Clarity",
        "description": "Sentence length, vocabulary diversity, and transition words.",
        "strength": "Communicates with exceptional clarity and precision",
        "weakness": "Needs improvement in clear and concise communication",
        "recommendation": "Use the PREP method: Point, Reason, Example, Point to organize thoughts",
        "short_term": "Write out key points before speaking in practice sessions",
        "long_term": "Work with a communication coach or mentor",
    },
    "structure": {
        "label": "Structure",
        "description": "Coverage of the STAR components plus logical flow words.",
        "strength": "Uses well-structured and organized response format",
        "weakness": "Could use better organization and structure in responses",
        "recommendation": "Practice STAR method (Situation, Task, Action, Result) for behavioral questions",
        "short_term": "Practice STAR method with 3 different scenarios this week",
        "long_term": "Practice different response frameworks for various question types",
    },
    "examples": {
        "label": "Use of Examples",
        "description": "Example phrases and specific details such as dates, durations, and company names.",
        "strength": "Effectively uses concrete examples to illustrate points",
        "weakness": "Should include more specific examples and evidence",
        "recommendation": "Prepare 3-5 detailed stories that demonstrate different skills and experiences",
        "short_term": "Prepare and practice 2-3 detailed stories from your experience",
        "long_term": "Build a portfolio of diverse professional experiences and stories",
    },
}

COMPREHENSIVE_RESPONSE_STRENGTH = "Provides comprehensive and detailed responses"
CONCRETE_EXAMPLES_STRENGTH = "Supports answers with concrete examples"
BRIEF_RESPONSE_WEAKNESS = "Responses are too brief and lack detail"


def category_label(category: str) -> str:
    meta = SCORING_CATEGORIES.get(category)
    return meta["label"] if meta else category


def scoring_metadata_payload() -> Dict[str, Any]:
    return {
        "categories": [
            {
                "key": key,
                "label": SCORING_CATEGORIES[key]["label"],
                "description": SCORING_CATEGORIES[key]["description"],
                "default_weight": DEFAULT_WEIGHTS[key],
            }
            for key in BREAKDOWN_CATEGORIES
        ],
        "levels": [{"level": level, "min_score": threshold} for level, threshold in LEVEL_THRESHOLDS],
        "presets": sorted(PRESET_WEIGHTS),
    }
