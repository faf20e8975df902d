"""Configuration module for the registration questionnaire."""

from .settings import QuestionnaireSettings, Settings, get_settings

__all__ = [
    "QuestionnaireSettings",
    "Settings",
    "get_settings",
]
