# Backend/evaluator/config.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Manages application-wide settings loaded from a .env file.
    """
    model_config = SettingsConfigDict(env_file='.env', env_ignore_empty=True)

    # --- Core Application Settings ---
    APP_ENV: str = "dev"
    API_PREFIX: str = "/api"
    FRONTEND_BASE_URL: str = "http://localhost:5173"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./evaluator.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 2
    DB_POOL_RECYCLE: int = 1800
    AUTO_CREATE_TABLES: bool = True

    # --- Leaderboard & Search ---
    LEADERBOARD_TOP_N: int = 10
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    SEARCH_RESULT_LIMIT: int = 20
    SKILL_RESULT_LIMIT: int = 50

    # --- Scoring ---
    # Shown as "out of N" for prompts the rubric catalog does not know.
    DEFAULT_TOTAL_POSSIBLE: int = 100

    # --- Profile Sharing ---
    SHARE_TOKEN_BYTES: int = 32

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "evaluator.log"
    ENABLE_FILE_LOGGING: bool = False
    ENABLE_CONSOLE_LOGGING: bool = True

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("SHARE_TOKEN_BYTES")
    @classmethod
    def validate_share_token_bytes(cls, v: int) -> int:
        # 16 bytes is the 128-bit floor for an unguessable link.
        if v < 16:
            raise ValueError("SHARE_TOKEN_BYTES must be at least 16")
        return v


settings = Settings()
