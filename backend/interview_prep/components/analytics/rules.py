"""Analytics thresholds and the static benchmark table."""

TREND_CHANGE_THRESHOLD_PCT = 5.0
PROFILE_WINDOW = 10
PROFILE_STRENGTH_MIN_AVG = 80.0
PROFILE_WEAKNESS_MAX_AVG = 65.0
PROFILE_MAX_ITEMS = 3

PREFERRED_DIFFICULTY_MIN_SESSIONS = 3
PREFERRED_DIFFICULTY_WINDOW = 5
PREFERRED_DIFFICULTY_THRESHOLDS = [
    ("hard", 85.0),
    ("medium", 70.0),
]

BENCHMARK_SAMPLE_SIZE = 1000
DEFAULT_BENCHMARK_KEY = "medium-behavioral"

# key -> (breakdown averages in category order, overall average, (p25, p50, p75, p90))
BENCHMARKS = {
    "easy-behavioral": ((75, 80, 70, 75, 85, 80, 75, 70), 76, (65, 76, 85, 92)),
    "easy-technical": ((70, 75, 65, 70, 80, 75, 70, 65), 71, (60, 71, 80, 88)),
    "medium-behavioral": ((75, 75, 70, 70, 80, 75, 70, 75), 74, (65, 74, 83, 90)),
    "medium-technical": ((70, 70, 65, 65, 75, 70, 65, 70), 69, (58, 69, 78, 86)),
    "hard-behavioral": ((70, 70, 65, 65, 75, 70, 65, 70), 69, (58, 69, 78, 86)),
    "hard-technical": ((65, 65, 60, 60, 70, 65, 60, 65), 64, (52, 64, 73, 82)),
}
PERCENTILE_KEYS = ("25th", "50th", "75th", "90th")
