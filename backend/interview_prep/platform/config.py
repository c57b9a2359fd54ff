from pydantic_settings import BaseSettings
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EngineLimits:
    performance_history_limit: int
    choice_history_limit: int
    recent_scores_window: int
    successful_session_score: float


class Settings(BaseSettings):
    # Deployment environment
    DEPLOYMENT_ENV: str = "development"

    # Database
    DATABASE_URL: str = "sqlite:///./interview_prep.db"

    # URLs
    FRONTEND_URL: str = "http://localhost:3000"
    BACKEND_URL: str = "http://localhost:8000"
    # Optional comma-separated extra CORS origins (e.g. Vercel preview URL)
    CORS_EXTRA_ORIGINS: Optional[str] = None
    # Optional regex for additional allowed CORS origins (e.g. all Vercel previews)
    CORS_ALLOW_ORIGIN_REGEX: Optional[str] = None

    # Sentry
    SENTRY_DSN: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Per-user history retention
    PERFORMANCE_HISTORY_LIMIT: int = 50
    CHOICE_HISTORY_LIMIT: int = 100
    # Number of most recent sessions the adaptive rules look at
    RECENT_SCORES_WINDOW: int = 3
    # A followed recommendation counts as accurate at or above this score
    SUCCESSFUL_SESSION_SCORE: float = 70.0

    @property
    def is_production(self) -> bool:
        return (self.DEPLOYMENT_ENV or "").strip().lower() == "production"

    @property
    def engine_limits(self) -> EngineLimits:
        return EngineLimits(
            performance_history_limit=max(1, self.PERFORMANCE_HISTORY_LIMIT),
            choice_history_limit=max(1, self.CHOICE_HISTORY_LIMIT),
            recent_scores_window=max(1, self.RECENT_SCORES_WINDOW),
            successful_session_score=self.SUCCESSFUL_SESSION_SCORE,
        )

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }


settings = Settings()
