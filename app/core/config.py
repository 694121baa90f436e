"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; no scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.shared.errors.formatter import DeploymentMode


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Expose the interactive docs. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        app_env: Deployment environment, "development" or "production".
        database_url: SQLAlchemy URL of the tour store.
        rate_limit_default: Rate limit applied to the tour endpoints.
        rate_limit_enabled: Turn rate limiting on or off.
        jwt_secret: Secret for bearer tokens. Destructive routes are
            unprotected when unset.
        jwt_algorithm: Signing algorithm accepted for bearer tokens.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "Tours API"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "production"
    database_url: str = "sqlite:///./tours.db"
    rate_limit_default: str = "100/hour"
    rate_limit_enabled: bool = True
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"

    @property
    def deployment_mode(self) -> DeploymentMode:
        """Deployment mode derived from app_env, defaulting to production."""
        return DeploymentMode.parse(self.app_env)


settings = Settings()
