from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./talentflow.db"

    # Login token
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Application
    APP_NAME: str = "TalentFlow"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://localhost:5173,"
        "http://127.0.0.1:3000,"
        "http://127.0.0.1:5173"
    )

    # Seeding
    SEED_ON_STARTUP: bool = True
    SEED_CANDIDATE_COUNT: int = 1000
    SEED_RANDOM_SEED: Optional[int] = None

    # Network simulation (milliseconds)
    SIMULATE_NETWORK: bool = True
    WRITE_DELAY_MIN_MS: int = 200
    WRITE_DELAY_MAX_MS: int = 1200
    WRITE_FAILURE_PROBABILITY: float = 0.07
    LOGIN_DELAY_MS: int = 800
    SUBMIT_DELAY_MS: int = 1000
    JOBS_LIST_DELAY_MS: int = 300
    CANDIDATES_LIST_DELAY_MS: int = 200
    ASSESSMENT_READ_DELAY_MS: int = 150


settings = Settings()
