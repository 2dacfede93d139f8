"""Logging setup for the report service: stdlib handlers feeding structlog JSON."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import structlog

from server.redaction import install_handler_redaction, install_stdlib_redaction, redact_secrets


# Third-party loggers that are chatty at INFO (httpx logs every TestClient call).
QUIET_LOGGERS = ("httpx", "openpyxl")


def configure_logging(level: str = "INFO", handlers: Optional[Iterable[logging.Handler]] = None) -> None:
    """Route stdlib and structlog records through one redacting JSON pipeline."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    handlers = list(handlers or [logging.StreamHandler()])
    logging.basicConfig(level=numeric_level, handlers=handlers, format="%(message)s")
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
    install_stdlib_redaction()
    # basicConfig is a no-op once the root logger has handlers, so cover both sets.
    for handler in [*handlers, *logging.getLogger().handlers]:
        install_handler_redaction(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_secrets,
            # Titles and organization names are mostly Georgian.
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
