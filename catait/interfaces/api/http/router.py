"""
===============================================================================
CRC CARD: router.py (Root router / Composition)
===============================================================================

Responsibilities:
  - Define the root APIRouter included by FastAPI (app.include_router).
  - Centralize RFC7807 responses for OpenAPI.
  - Compose feature routers (cards, auth, admin users).

Notes:
  - api/main.py mounts this router at the root and again under /api.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.auth import router as auth_router
from .routers.cards import router as cards_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Build the root router (no import-time side effects beyond composition)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(cards_router)
    api_router.include_router(auth_router)
    api_router.include_router(users_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
