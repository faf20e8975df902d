"""Application settings using Pydantic Settings.

Centralized configuration for the registration questionnaire.

Environment variables:
- APP_ENVIRONMENT: development | test | staging | production
- APP_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
- APP_LOG_JSON: emit JSON log lines instead of the readable format
- APP_LOG_FILE: optional path for an additional JSON log file
- QUESTIONNAIRE_SHOW_PROPERTY_OWNER_OPTION: offer the hidden
  "property-owner" applicant type in the choice list
- QUESTIONNAIRE_ALLOW_RESUME_FROM_BLOCKED: let applicants without a TIN
  go back and change their answer
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class QuestionnaireSettings(BaseSettings):
    """Eligibility questionnaire behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="QUESTIONNAIRE_",
        extra="ignore",
    )

    # Pending product clarification the option stays hidden
    show_property_owner_option: bool = Field(
        default=False,
        description="Offer the property-owner applicant type in the choice list",
    )
    allow_resume_from_blocked: bool = Field(
        default=True,
        description="Allow going back from the no-TIN blocked state",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    name: str = Field(default="Tax Registration Questionnaire", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Emit JSON formatted logs")
    log_file: Optional[Path] = Field(default=None, description="Optional JSON log file")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    # Nested settings (loaded separately)
    @property
    def questionnaire(self) -> QuestionnaireSettings:
        return QuestionnaireSettings()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment in ("production", "prod", "staging")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Cached settings loaded from environment.
    """
    return Settings()
