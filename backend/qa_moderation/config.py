import json
import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_SETTINGS_FILE = Path("data/settings.json")
_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_RATE_LIMIT_KEYS = frozenset({
    "rate_limit_second_level_posts",
    "rate_limit_new_user_second_level_posts",
})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Q&A Moderation API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./qa_moderation.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Answer rate limits — posts per window, by "unrestricted" standing
    rate_limit_second_level_posts: int = 20
    rate_limit_new_user_second_level_posts: int = 3
    rate_limit_window_hours: int = 24

    # Comments created by answer conversion
    comment_max_length: int = 500

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_moderation: str = "INFO"       # review workflow and answer curation
    log_level_notifications: str = "INFO"    # background notifier

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Merge runtime rate-limit overrides from data/settings.json."""
        if _SETTINGS_FILE.exists():
            try:
                overrides = json.loads(_SETTINGS_FILE.read_text("utf-8"))
                for key in _RATE_LIMIT_KEYS:
                    if key in overrides and isinstance(overrides[key], int):
                        object.__setattr__(self, key, overrides[key])
            except (OSError, ValueError) as exc:
                _config_logger.warning("Could not load settings overrides: %s", exc)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
