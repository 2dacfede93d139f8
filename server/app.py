"""FastAPI application factory for the task report service."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reporting.exceptions import ReportError
from server import database
from server.config import get_settings
from server.logging import configure_logging
from server.routes.router import router


async def report_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Already logged as function.rejected by the timed route wrapper.
    return JSONResponse(status_code=getattr(exc, "status_code", 500), content={"detail": str(exc)})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    database.init_db()

    app = FastAPI(title="Task Pivot Report API")
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Authorization", "Content-Type"],
            expose_headers=["Content-Disposition"],
        )
    app.add_exception_handler(ReportError, report_error_handler)
    app.include_router(router)
    return app


def main() -> None:  # pragma: no cover - server entrypoint
    settings = get_settings()
    uvicorn.run("server.app:create_app", factory=True, host=settings.api.host, port=settings.api.port)


if __name__ == "__main__":  # pragma: no cover - server entrypoint
    main()
