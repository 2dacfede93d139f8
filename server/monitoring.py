"""Request-scoped log context and endpoint timing."""

from __future__ import annotations

import time
import uuid
from contextvars import ContextVar
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from reporting.exceptions import ReportError


request_id: ContextVar[str] = ContextVar("request_id", default="")

FuncType = TypeVar("FuncType", bound=Callable[..., Awaitable[Any]])


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def with_request_id(func: FuncType) -> FuncType:
    """Bind a fresh request id into the structlog context for the call."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        value = uuid.uuid4().hex
        token = request_id.set(value)
        structlog.contextvars.bind_contextvars(request_id=value)
        try:
            return await func(*args, **kwargs)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
            request_id.reset(token)

    return wrapper  # type: ignore[return-value]


def timed(func: FuncType) -> FuncType:
    """Log the duration of an endpoint.

    Report errors are client-facing outcomes (empty filters, missing body) and
    are logged as rejections; anything else is logged with its traceback.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        logger = structlog.get_logger(func.__module__)
        started = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except ReportError as exc:
            logger.warning(
                "function.rejected",
                function=func.__name__,
                duration_ms=_elapsed_ms(started),
                status_code=exc.status_code,
                error=str(exc),
            )
            raise
        except Exception as exc:
            logger.exception(
                "function.error",
                function=func.__name__,
                duration_ms=_elapsed_ms(started),
                error=str(exc),
            )
            raise
        logger.info("function.complete", function=func.__name__, duration_ms=_elapsed_ms(started))
        return result

    return wrapper  # type: ignore[return-value]
