"""
Logging Configuration for the Registration Questionnaire.

Records carry their context in ``record.extra_data``. Questionnaire sessions
bind ``session_id`` once through ``get_logger`` and every transition adds
its own fields (question id, answer, track).

- JSON lines for production and for the optional log file
- One-line readable output for development
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from config.settings import Settings


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return dict(getattr(record, 'extra_data', None) or {})


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record.

    ``session_id`` is lifted to the top level; the remaining context fields
    follow the message.
    """

    def format(self, record: logging.LogRecord) -> str:
        context = _context(record)
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "session_id": context.pop("session_id", None),
            "message": record.getMessage(),
        }
        entry.update(context)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ReadableFormatter(logging.Formatter):
    """``12:03:44 INFO     [eligibility.session] (s-1) Answer recorded | question_id=has-tin``"""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-8s [%(name)s] %(message)s", datefmt="%H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        context = _context(record)
        session_id = context.pop("session_id", None)
        line = super().formatMessage(record)
        if session_id:
            line = line.replace(f"[{record.name}] ", f"[{record.name}] ({session_id}) ", 1)
        if context:
            line += " | " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes bound context in all log messages.
    """

    def process(self, msg: str, kwargs: Dict) -> tuple:
        """Merge bound context into the record's extra_data."""
        extra = dict(kwargs.get('extra') or {})

        extra_data = {k: v for k, v in self.extra.items() if v is not None}
        extra_data.update(extra.get('extra_data') or {})

        extra['extra_data'] = extra_data
        kwargs['extra'] = extra
        return msg, kwargs


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """
    Replace the root handlers with a stdout handler and, optionally, a file.

    Args:
        level: Root log level name
        json_output: JSON lines on stdout instead of the readable format
        log_file: Extra destination, always written as JSON lines
    """
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(JsonFormatter() if json_output else ReadableFormatter())
    handlers: List[logging.Handler] = [console]

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(JsonFormatter())
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers[:] = handlers


def configure_logging_from_settings(settings: "Settings") -> None:
    """Configure logging from application settings; debug mode forces DEBUG."""
    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_output=settings.log_json,
        log_file=settings.log_file,
    )


def get_logger(name: str, **extra) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (typically __name__)
        **extra: Context to include in all logs; None values are dropped

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), extra)
