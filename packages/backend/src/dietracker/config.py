"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with DIETRACKER_ prefix.
No config files — just env vars (12-factor app style).
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings

ENVIRONMENTS = ("local", "dev", "prod")


class Settings(BaseSettings):
    """All app configuration. Set via DIETRACKER_* env vars."""

    environment: str = "local"
    debug: bool = False

    # Storage
    database_url: str = "sqlite+aiosqlite:///./storage/tracker.db"
    default_daily_limit: int = 2000

    # Server
    host: str = "localhost"
    port: int = 8080

    # Tokens are issued by the identity service and signed with this secret
    app_secret: str = "change-me-in-production"
    app_id: int = 1
    jwt_algorithm: str = "HS256"

    # Identity service
    identity_url: str = "http://localhost:44044"
    identity_timeout_seconds: float = 4.0
    identity_retries_count: int = 3

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    model_config = {"env_prefix": "DIETRACKER_"}

    @model_validator(mode="after")
    def validate_settings(self):
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"DIETRACKER_ENVIRONMENT must be one of {', '.join(ENVIRONMENTS)}"
            )
        if self.environment != "local" and self.app_secret == "change-me-in-production":
            raise ValueError(
                "DIETRACKER_APP_SECRET must be set to the identity service "
                "signing secret outside the local environment"
            )
        if self.identity_retries_count < 1:
            raise ValueError("DIETRACKER_IDENTITY_RETRIES_COUNT must be at least 1")
        return self


# Singleton, import this everywhere
settings = Settings()
