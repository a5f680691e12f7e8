"""Tracker Configuration Settings."""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=True)

    # Database
    DATABASE_URL: Optional[str] = None

    # JWT
    JWT_SECRET_KEY: str = Field(default="change-this-secret-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440

    # Accounts
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    MIN_PASSWORD_LENGTH: int = 6

    # Projects
    FINISHED_AFTER_DAYS: int = 7
    DEFAULT_WORKSPACE_NAME: str = "Default"

    # External identity provider (only its presence is checked here)
    SSO_CLIENT_ID: str = ""
    SSO_TENANT_ID: str = ""

    # Application
    APP_NAME: str = "Project Tracker"
    APP_VERSION: str = "2.15.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    @property
    def cors_origins_list(self) -> List[str]:
        """Return the configured CORS origins as a sanitized list."""

        if not self.CORS_ORIGINS:
            return []

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def sso_enabled(self) -> bool:
        return bool(self.SSO_CLIENT_ID and self.SSO_TENANT_ID)


settings = Settings()
