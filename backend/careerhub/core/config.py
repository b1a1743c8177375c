from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./careerhub.db"

    # Shared admin identity (single credential pair, not per-admin accounts)
    ADMIN_USERNAME: str = "admin@careerhub.local"
    ADMIN_PASSWORD: str = "change-me-in-production"

    # Sessions
    SESSION_TTL_HOURS: int = 24

    # Matching thresholds
    MATCH_SCORE_THRESHOLD: int = 30  # display score (0-100) a job must exceed
    CV_MATCH_RATIO_THRESHOLD: float = 0.3  # raw ratio a CV must exceed for a job

    # CV files live in an external blob store; we only keep references
    FILE_STORE_URL: str = "http://localhost:9000/careerhub-files"
    MAX_CV_FILE_BYTES: int = 10 * 1024 * 1024

    # Application
    APP_NAME: str = "CareerHub"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://localhost:5174,"
        "http://127.0.0.1:5173,"
        "http://127.0.0.1:5174"
    )


settings = Settings()
