"""
Ideaboard – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── App ──
    APP_NAME: str = "Ideaboard"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    # ── Database ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./ideaboard.db"

    # ── Sessions ──
    SECRET_KEY: str = "change-me-to-a-random-secret"
    SESSION_COOKIE_NAME: str = "ideaboard.sid"
    SESSION_MAX_AGE_DAYS: int = 30

    # ── Passwords ──
    BCRYPT_ROUNDS: int = 10

    # ── Gemini ──
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_TIMEOUT_SECONDS: float = 30.0

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
