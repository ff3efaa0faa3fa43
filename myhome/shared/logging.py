"""
Logging Configuration - Shared Layer

structlog is layered on top of the standard ``logging`` module so that
records emitted by third-party libraries (pymongo, sqlite adapters) and by
our own structured loggers end up in the same handlers.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from myhome.shared.consts import EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that are chatty at INFO level.
_NOISY_LOGGERS = ("pymongo",)


def _enum_value(value: Any) -> Any:
    return value.value if hasattr(value, "value") else value


def _build_formatter(environment: str, format_string: str) -> logging.Formatter:
    env_value = environment.lower()
    if env_value == EnumEnvironment.TESTING:
        # Plain records keep pytest's caplog output readable.
        return logging.Formatter(format_string)

    renderer: Processor
    if env_value == EnumEnvironment.PRODUCTION:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
    )


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure stdlib logging and structlog.

    Call it once at startup; ``update_logging_from_settings`` reapplies it
    once the settings object is available.

    Args:
        level: Log level name, falls back to ``LOG_LEVEL`` then ``INFO``.
        format_string: stdlib format, used for the plain testing formatter.
        file_path: Optional log file, falls back to ``LOG_FILE_PATH``.
        environment: Application environment (development, production, etc.)
    """
    log_level = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    log_format = format_string or os.environ.get("LOG_FORMAT") or DEFAULT_LOG_FORMAT
    log_file = file_path or os.environ.get("LOG_FILE_PATH")
    numeric_level = getattr(logging, log_level, logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = _build_formatter(environment, log_format)
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logging.getLogger(__name__).info(
        "logging.configured level=%s file=%s", log_level, log_file
    )


def update_logging_from_settings(settings: Any) -> None:
    """Reconfigure logging from an ``AppSettings``-like object."""
    try:
        configure_logging(
            level=_enum_value(settings.logging.level),
            format_string=settings.logging.format,
            file_path=settings.logging.file_path,
            environment=_enum_value(settings.environment),
        )
    except (AttributeError, OSError) as e:
        logging.getLogger(__name__).error(
            "logging.update_failed error=%s", e, exc_info=e
        )


def get_logger(name: str, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, optionally pre-bound with context values."""
    return structlog.get_logger(name, **initial_values)
