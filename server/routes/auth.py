"""Auth helpers for API endpoints.

If REPORT_API_TOKEN is set, the export endpoint (which hands out website
credentials) requires an Authorization header:

    Authorization: Bearer <token>
"""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import HTTPException, Request

from server.config import get_settings


def bearer_token(header_value: Optional[str]) -> Optional[str]:
    """Extract the credential from an ``Authorization`` header; the scheme is case-insensitive."""
    scheme, _, credential = (header_value or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credential.strip() or None


def require_api_token(request: Request) -> None:
    expected = get_settings().api_token
    if not expected:
        return

    provided = bearer_token(request.headers.get("Authorization"))
    if provided is None:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    if not secrets.compare_digest(provided, expected):
        raise HTTPException(status_code=401, detail="Invalid bearer token")
