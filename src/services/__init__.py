"""
Services Module - Infrastructure services for the registration questionnaire.

- Logging and observability
"""

from .logging_config import (
    ContextLogger,
    JsonFormatter,
    ReadableFormatter,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)

__all__ = [
    "ContextLogger",
    "JsonFormatter",
    "ReadableFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
