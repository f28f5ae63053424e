# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (skipped when ENVIRONMENT/NODE_ENV=production)
#
# Settings are built once at process entry and handed to create_app(); route
# handlers receive them through dependency injection instead of reading the
# environment themselves.
# =============================================================================

import os
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Load from .env file outside production
    - Validate types and constraints
    - Fail fast when datastore secrets are missing
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        min_length=1,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_ROLE_KEY: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_SERVICE_KEY"),
        description="Supabase service_role key (bypasses RLS, backend only)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    SERVICE_NAME: str = Field(
        default="thats-whatsupp-backend",
        description="Service name reported by /health"
    )

    COMMIT_SHA: str | None = Field(
        default=None,
        validation_alias=AliasChoices("COMMIT_SHA", "RENDER_GIT_COMMIT"),
        description="Deployed commit, supplied by the hosting platform"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    SHUTDOWN_GRACE_SECONDS: int = Field(
        default=10,
        ge=0,
        description="How long in-flight requests may run after a shutdown signal"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # Comma-separated string that gets parsed into the origin registry
    ALLOWED_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Browser origins allowed to call the API (comma-separated)"
    )

    MAX_BODY_BYTES: int = Field(
        default=1024 * 1024,
        ge=1,
        description="Maximum accepted JSON request body size"
    )

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    SEARCH_RESULT_LIMIT: int = Field(
        default=25,
        ge=1,
        le=100,
        description="Maximum number of rows returned by /api/search"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Empty values fall back to defaults (or fail for required fields)
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )


def _env_file() -> str | None:
    """Local .env files are only honoured outside production."""
    environment = os.getenv("ENVIRONMENT") or os.getenv("NODE_ENV")
    return None if environment == "production" else ".env"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.

    Raises:
        pydantic.ValidationError: If a required secret is missing or invalid
    """
    return Settings(_env_file=_env_file())
