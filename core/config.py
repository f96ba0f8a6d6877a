"""
Application configuration using Pydantic settings.

Usage:
    from core.config import get_settings
    settings = get_settings()

For domain constants, import from core.constants:
    from core.constants import SKILL_LEVELS, DEFAULT_SKILLS
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - DATABASE_URL (PostgreSQL)
        - FIREBASE_PROJECT_ID (when AUTH_PROVIDER=firebase)
        - JWT_SECRET_KEY (min 32 chars, only when AUTH_PROVIDER=jwt)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = Field(default="SkillShare", validation_alias="APP_NAME")
    env: str = Field(default="development", validation_alias="ENV")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    max_request_size_mb: int = Field(default=1, validation_alias="MAX_REQUEST_SIZE_MB")

    # Database
    database_url: str = Field(default="sqlite:///skillshare.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    db_pool_timeout: float = Field(default=5.0, validation_alias="DB_POOL_TIMEOUT")
    db_connect_timeout: int = Field(default=5, validation_alias="DB_CONNECT_TIMEOUT")
    db_statement_timeout_ms: int = Field(default=10000, validation_alias="DB_STATEMENT_TIMEOUT_MS")

    # Identity provider
    auth_provider: Literal["firebase", "jwt"] = Field(default="firebase", validation_alias="AUTH_PROVIDER")
    firebase_project_id: str = Field(default="", validation_alias="FIREBASE_PROJECT_ID")
    firebase_certs_url: str = Field(
        default="https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com",
        validation_alias="FIREBASE_CERTS_URL",
    )
    firebase_certs_ttl: int = Field(default=60 * 60, validation_alias="FIREBASE_CERTS_TTL")

    # Locally signed tokens (AUTH_PROVIDER=jwt)
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    # Redis
    cache_enabled: bool = Field(default=True, validation_alias="CACHE_ENABLED")
    redis_host: str = Field(default="localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(default=6379, validation_alias="REDIS_PORT")
    redis_db: int = Field(default=0, validation_alias="REDIS_DB")
    redis_password: Optional[str] = Field(default=None, validation_alias="REDIS_PASSWORD")

    # Pagination
    default_page_size: int = Field(default=20, validation_alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, validation_alias="MAX_PAGE_SIZE")

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Reject weak JWT secrets in production; development only warns at startup."""
        import os

        env = os.getenv("ENV", "development")
        is_production = env.lower() in ("production", "prod")
        uses_jwt = os.getenv("AUTH_PROVIDER", "firebase").lower() == "jwt"

        if is_production and uses_jwt:
            if v.lower() in [fv.lower() for fv in FORBIDDEN_SECRETS]:
                raise ValueError(
                    f"JWT_SECRET_KEY cannot be a default value ('{v}') in production. "
                    "Generate a secure key with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
                )
            if len(v) < 32:
                raise ValueError(
                    f"JWT_SECRET_KEY must be at least 32 characters in production (got {len(v)})."
                )
        return v

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "prod")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_production_config(self) -> tuple[list[str], list[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.auth_provider == "firebase" and not self.firebase_project_id:
            errors.append("FIREBASE_PROJECT_ID is required when AUTH_PROVIDER=firebase")

        if self.auth_provider == "jwt":
            if self.jwt_secret_key.lower() in [fv.lower() for fv in FORBIDDEN_SECRETS]:
                errors.append("JWT_SECRET_KEY must be set when AUTH_PROVIDER=jwt")
            elif len(self.jwt_secret_key) < 32:
                warnings.append("JWT_SECRET_KEY should be at least 32 characters")
            if self.is_production:
                warnings.append(
                    "AUTH_PROVIDER=jwt is meant for local development; use firebase in production"
                )

        if self.is_production and self.is_sqlite:
            warnings.append("DATABASE_URL points at SQLite; use PostgreSQL in production")

        if self.is_production and "localhost" in self.cors_allowed_origins:
            warnings.append("CORS_ALLOWED_ORIGINS allows localhost in production")

        if not 1 <= self.default_page_size <= self.max_page_size:
            errors.append("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")

        return errors, warnings


FORBIDDEN_SECRETS = [
    "CHANGE_ME", "changeme", "secret", "your-secret-key",
    "jwt-secret", "supersecret", "development", "test",
]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
