"""Log redaction for credentials handled by the export service.

Organizations carry website credentials (identification codes and passwords)
that end up in report rows. None of it may reach the logs, and neither may
the API bearer token or database URL passwords.

Usage:
    Structlog: add `redact_secrets` to the processor chain before the renderer.
    Stdlib: use `SecretRedactionFilter` as a logging filter.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, MutableMapping
from dataclasses import asdict, is_dataclass
from typing import Any, Optional


REDACTED = "[REDACTED]"

SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-./+=]{6,}", re.IGNORECASE), "Bearer [REDACTED]"),
    (
        re.compile(r'(["\']?Authorization["\']?\s*[:=]\s*)(?!["\']?Bearer\s)["\']?[^"\'}\s]{6,}["\']?', re.IGNORECASE),
        r"\1[REDACTED]",
    ),
    # password=..., "password": "..."
    (
        re.compile(r'(["\']?(?:password|passwd|api[_-]?token)["\']?\s*[:=]\s*)["\']?[^"\'\s,}]+["\']?', re.IGNORECASE),
        r"\1[REDACTED]",
    ),
    # user:pass@host in connection URLs
    (re.compile(r"(://[^:/@]+:)[^@]+(@)"), r"\1[REDACTED]\2"),
]

SENSITIVE_FIELD_NAMES = frozenset(
    {
        "password",
        "passwd",
        "identification_code",
        "identificationcode",
        "websites",
        "websites_text",
        "webdata",
        "token",
        "api_token",
        "authorization",
        "bearer",
        "credentials",
    }
)


def redact_string(value: str) -> str:
    for pattern, replacement in SECRET_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def _is_sensitive_key(key: object) -> bool:
    return str(key).lower().replace("-", "_") in SENSITIVE_FIELD_NAMES


def _redact_value(key: object, value: Any) -> Any:
    if _is_sensitive_key(key):
        return value if value in (None, "", [], {}, ()) else REDACTED
    if isinstance(value, str):
        return redact_string(value)
    # Organization/TaskRecord dataclasses carry website credentials when logged whole.
    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, Mapping):
        return {k: _redact_value(k, v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact_value("", item) for item in value]
    return value


def redact_secrets(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor; must run before the renderer."""
    return {key: _redact_value(key, value) for key, value in event_dict.items()}


class SecretRedactionFilter(logging.Filter):
    """Applies the structlog redaction rules to stdlib records.

    Logger filters only see records created by that exact logger, so records
    propagating from `uvicorn.*` or `sqlalchemy.*` are covered by attaching
    this filter to the handlers instead (see `install_handler_redaction`).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_string(record.msg)
        if isinstance(record.args, Mapping):
            record.args = _redact_value("", record.args)
        elif isinstance(record.args, tuple):
            record.args = tuple(_redact_value("", arg) if isinstance(arg, str) else arg for arg in record.args)
        if record.exc_text:
            record.exc_text = redact_string(record.exc_text)
        return True


def install_stdlib_redaction(logger_name: Optional[str] = None) -> None:
    """Attach one SecretRedactionFilter to ``logger_name`` (root by default)."""
    target = logging.getLogger(logger_name)
    if not any(isinstance(existing, SecretRedactionFilter) for existing in target.filters):
        target.addFilter(SecretRedactionFilter())


def install_handler_redaction(handler: logging.Handler) -> None:
    """Attach one SecretRedactionFilter to ``handler``; covers records from every logger it serves."""
    if not any(isinstance(existing, SecretRedactionFilter) for existing in handler.filters):
        handler.addFilter(SecretRedactionFilter())
