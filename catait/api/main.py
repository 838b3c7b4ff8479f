"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize the FastAPI application with metadata (title, version)
  - Configure middleware (body limit, request context, CORS)
  - Mount the business router at the root and under /api
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI / CORSMiddleware
  - RequestContextMiddleware / BodyLimitMiddleware
  - interfaces.api.http.router: cards + auth endpoints
  - infrastructure.db.pool: pool lifecycle in lifespan

Notes:
  - Middleware order matters: RequestContext -> BodyLimit -> CORS -> routes
  - /healthz and /readyz ping the database
  - /metrics exposes Prometheus metrics (auth when METRICS_REQUIRE_AUTH=true)
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..container import get_card_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..identity.auth import is_auth_enabled, require_metrics_auth
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers
from .versioning import include_route_aliases


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Initializes and closes the pool."""
    settings = get_settings()

    init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )

    try:
        logger.info(
            "CATAIT API starting up",
            extra={
                "app_env": settings.app_env,
                "auth_enabled": is_auth_enabled(),
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        close_pool()
        logger.info("CATAIT API shutting down")


def _db_status() -> str:
    # ping() logs and swallows store errors; health endpoints never raise.
    return "connected" if get_card_repository().ping() else "disconnected"


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="CATAIT API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "cards", "description": "Feature card catalog and lookup"},
            {"name": "auth", "description": "Password reset tokens"},
        ],
    )

    # R: add_middleware prepends, so the last one added runs first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-API-Key", "X-Request-Id"],
    )
    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(router)
    include_route_aliases(app)

    register_exception_handlers(app)

    @app.get("/healthz", tags=["ops"])
    def healthz(request: Request):
        db_status = _db_status()
        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/readyz", tags=["ops"])
    def readyz(request: Request):
        db_status = _db_status()
        body = {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }
        if db_status != "connected":
            return JSONResponse(status_code=503, content=body)
        return body

    @app.get("/metrics", tags=["ops"])
    def metrics(_auth: None = Depends(require_metrics_auth())):
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
