"""
Application settings loaded from the environment (and an optional .env file).
"""

import sys
from functools import lru_cache
from typing import List

import structlog
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """Runtime configuration. DATABASE_URL and SECRET_JWT have no defaults."""

    # Database
    database_url: str = Field(..., min_length=1)

    # Tokens
    secret_jwt: str = Field(..., min_length=8)
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = Field(default=60, ge=1)

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # CORS
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of: {valid_formats}")
        return v.lower()


def load_settings(**overrides) -> Settings:
    """
    Build settings or terminate the process.

    Missing or malformed configuration is fatal: the error is logged and the
    process exits with status 1 before any connection is accepted.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        logger.error("Invalid environment configuration", problems=problems)
        sys.exit(1)


@lru_cache()
def get_settings() -> Settings:
    """Cached settings for the running process."""
    return load_settings()
