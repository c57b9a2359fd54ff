"""Scoring constants: weights, presets, keyword tables, and thresholds."""

BREAKDOWN_CATEGORIES = [
    "technical_accuracy",
    "communication_skills",
    "problem_solving",
    "confidence",
    "relevance",
    "clarity",
    "structure",
    "examples",
]

# Fixed aggregation weights (sum to 1.0)
DEFAULT_WEIGHTS = {
    "technical_accuracy": 0.15,
    "communication_skills": 0.20,
    "problem_solving": 0.15,
    "confidence": 0.10,
    "relevance": 0.15,
    "clarity": 0.10,
    "structure": 0.10,
    "examples": 0.05,
}

PRESET_WEIGHTS = {
    "technical": {
        "technical_accuracy": 0.30,
        "communication_skills": 0.15,
        "problem_solving": 0.20,
        "confidence": 0.05,
        "relevance": 0.10,
        "clarity": 0.10,
        "structure": 0.05,
        "examples": 0.05,
    },
    "behavioral": {
        "technical_accuracy": 0.05,
        "communication_skills": 0.25,
        "problem_solving": 0.10,
        "confidence": 0.10,
        "relevance": 0.15,
        "clarity": 0.10,
        "structure": 0.15,
        "examples": 0.10,
    },
    "product-manager": {
        "technical_accuracy": 0.10,
        "communication_skills": 0.20,
        "problem_solving": 0.20,
        "confidence": 0.10,
        "relevance": 0.15,
        "clarity": 0.10,
        "structure": 0.10,
        "examples": 0.05,
    },
    "leadership": {
        "technical_accuracy": 0.05,
        "communication_skills": 0.20,
        "problem_solving": 0.15,
        "confidence": 0.15,
        "relevance": 0.10,
        "clarity": 0.10,
        "structure": 0.10,
        "examples": 0.15,
    },
}

WEIGHT_SUM_TOLERANCE = 0.01

# ---------------------------------------------------------------------------
# Technical accuracy
# ---------------------------------------------------------------------------
ROLE_TECHNICAL_KEYWORDS = {
    "Frontend Engineer": {
        "react": 3, "javascript": 3, "css": 2, "html": 2, "typescript": 3,
        "responsive": 2, "performance": 3, "accessibility": 2, "webpack": 2,
    },
    "Backend Engineer": {
        "api": 3, "database": 3, "sql": 2, "python": 2, "java": 2,
        "microservices": 3, "scalability": 3, "security": 3, "docker": 2,
    },
    "Full Stack Engineer": {
        "full stack": 3, "frontend": 2, "backend": 2, "database": 3,
        "api": 3, "deployment": 2, "architecture": 3, "cloud": 2,
    },
    "Product Manager": {
        "user experience": 3, "metrics": 3, "roadmap": 3, "stakeholders": 3,
        "agile": 2, "requirements": 2, "market": 3, "analytics": 3,
    },
}
TECHNICAL_DETAIL_MIN_CHARS = 200
TECHNICAL_DETAIL_BONUS = 10.0
TECHNICAL_NOT_APPLICABLE_SCORE = 100.0
TECHNICAL_NO_KEYWORDS_SCORE = 50.0

# ---------------------------------------------------------------------------
# Communication
# ---------------------------------------------------------------------------
# (min words/sec, max words/sec, score), first match wins
SPEAKING_RATE_BANDS = [
    (1.5, 4.0, 100.0),
    (1.0, 5.0, 80.0),
    (0.5, 6.0, 60.0),
]
SPEAKING_RATE_FALLBACK = 40.0
FILLER_WORDS = ["um", "uh", "like", "you know", "basically"]
FILLER_PENALTY_PER_WORD = 5.0
FILLER_PENALTY_CAP = 30.0
COMMUNICATION_FLOOR = 20.0

# ---------------------------------------------------------------------------
# Problem solving
# ---------------------------------------------------------------------------
PROBLEM_SOLVING_KEYWORDS = [
    "analyze", "approach", "solution", "strategy", "consider", "evaluate",
    "pros and cons", "trade-off", "alternative", "implement", "test",
    "first", "then", "next", "finally", "because", "therefore",
]
SEQUENCE_MARKER_PATTERN = r"\b(first|second|third|1\.|2\.|3\.|step|phase)\b"

# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------
CONFIDENT_PHRASES = ["i believe", "i think", "in my experience", "i would", "i will"]
UNCERTAIN_PHRASES = ["maybe", "perhaps", "i guess", "not sure", "probably"]
CONFIDENCE_BASE = 50.0
CONFIDENCE_FLOOR = 20.0

# ---------------------------------------------------------------------------
# Relevance
# ---------------------------------------------------------------------------
STOP_WORDS = {"the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with"}
SELF_REFERENCE_TERMS = ["question", "answer", "experience"]

# ---------------------------------------------------------------------------
# Clarity
# ---------------------------------------------------------------------------
TRANSITION_WORDS = ["however", "therefore", "furthermore", "additionally", "consequently"]

# ---------------------------------------------------------------------------
# Structure (STAR)
# ---------------------------------------------------------------------------
STAR_INDICATORS = {
    "situation": ["situation", "context", "background", "when", "where"],
    "task": ["task", "challenge", "problem", "goal", "objective"],
    "action": ["action", "did", "implemented", "decided", "approach"],
    "result": ["result", "outcome", "achieved", "success", "learned"],
}
FLOW_WORDS = ["first", "then", "next", "finally", "because", "so", "therefore"]

# ---------------------------------------------------------------------------
# Examples
# ---------------------------------------------------------------------------
EXAMPLE_INDICATORS = [
    "for example", "for instance", "such as", "like when", "in my experience",
    "at my previous job", "when i worked", "in one project", "recently",
]
# Matched against lower-cased text
DATE_DURATION_PATTERN = r"\b(?:19|20)\d{2}\b|\b\d+\s?(?:months?|years?|weeks?)\b"
# Matched against the response before lowercasing (needs capitalisation)
COMPANY_NAME_PATTERN = r"\b[A-Z][a-zA-Z]+\s+(?:Company|Corp|Inc|Ltd)\b"
BEHAVIORAL_EXAMPLES_MULTIPLIER = 1.2

# ---------------------------------------------------------------------------
# Level assessment
# ---------------------------------------------------------------------------
# Ordered: first keyword found in the role title wins
ROLE_COMPLEXITY = [
    ("Senior", 10),
    ("Lead", 15),
    ("Principal", 20),
    ("Staff", 15),
    ("Manager", 10),
]
LEVEL_THRESHOLDS = [
    ("senior", 85),
    ("mid", 70),
    ("junior", 50),
]

# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------
STRENGTH_MIN_SCORE = 80
WEAKNESS_MAX_SCORE = 60
IMPROVEMENT_MAX_SCORE = 70
COMPREHENSIVE_RESPONSE_MIN_CHARS = 300
BRIEF_RESPONSE_MAX_CHARS = 50
MAX_FEEDBACK_ITEMS = 5
MAX_PLAN_ITEMS = 3
