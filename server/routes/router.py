"""Application router collecting the service endpoints."""

from typing import Dict

from fastapi import APIRouter

from server.routes.exports import router as exports_router


router = APIRouter()


@router.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


router.include_router(exports_router)


__all__ = ["router"]
