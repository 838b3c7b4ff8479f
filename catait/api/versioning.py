"""
===============================================================================
CRC CARD: catait/api/versioning.py (Route aliases)
===============================================================================

Responsibilities:
  - Expose the business router under /api as well as at the root, so clients
    that call /api/cards/... keep working.
  - Avoid coupling business routers to several prefixes.

Collaborators:
  - interfaces.api.http.router (business router)
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI

from ..interfaces.api.http.router import router as business_router


def include_route_aliases(app: FastAPI) -> None:
    """/api/... -> same router as /..."""
    app.include_router(business_router, prefix="/api")


__all__ = ["include_route_aliases"]
