"""
Standardized Logging Configuration

Structured logging setup for the conversation engine.
Supports JSON logging for production and human-readable output for development.
"""

import logging
import sys
from enum import Enum
from typing import Any, List, Optional

import structlog

from dialogue_core.core.config import get_settings


# =============================================================================
# Configuration
# =============================================================================


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    PRETTY = "pretty"
    SIMPLE = "simple"


# =============================================================================
# Logger Setup
# =============================================================================


def _renderer(format: str) -> Any:
    if format == LogFormat.JSON:
        return structlog.processors.JSONRenderer()
    if format == LogFormat.PRETTY:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    level: Optional[str] = None,
    format: Optional[str] = None,
) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format (json, pretty, simple)

    Missing arguments fall back to ConversationSettings.
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    format = (format or settings.log_format).lower()
    numeric_level = getattr(logging, level)

    # Get root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if format == LogFormat.JSON:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(format))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    structlog.get_logger(__name__).info(
        "logging_configured",
        level=level,
        format=format,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger with the given name.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)


__all__ = [
    "LogLevel",
    "LogFormat",
    "setup_logging",
    "get_logger",
]
