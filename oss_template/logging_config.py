"""
Structlog configuration.

Applications embedding the storage facade call ``configure_logging()`` once at
startup; module loggers are obtained with ``structlog.get_logger(__name__)``.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from oss_template.config import load_settings
from oss_template.exceptions import ConfigurationError


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog for JSON logging with ISO timestamps.

    All logs are output as JSON with consistent fields:
    - timestamp: ISO 8601 format
    - level: log level (info, warning, error, etc.)
    - event: log message
    - Additional context fields (bucket, key, etc.)

    Args:
        level: Root log level; defaults to ``OSS_LOG_LEVEL``, or INFO when
            the settings cannot be read.
    """
    if level is None:
        level = _default_level()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level.upper())

    # Reduce noise from the SDK
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _default_level() -> str:
    # Storage credentials are not needed to pick a log level
    try:
        return load_settings(ENABLED=False).LOG_LEVEL
    except ConfigurationError:
        return "INFO"
