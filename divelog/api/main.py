"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (metadata, middleware, routers, handlers)
  - Startup: validate settings, open the DB pool, seed roles and super admin
  - Expose the welcome, status and health check endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware / RequestContextMiddleware
  - interfaces.api.http.router: users, roles, logbooks under /api/v1
  - auth_routes: login and /me under /api/v1
  - application.usecases.bootstrap

Notes:
  - Settings are validated in the lifespan, not at import time
  - /healthz follows the Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..application.usecases import bootstrap
from ..container import get_role_repository, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()

    if settings.uses_postgres():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        try:
            bootstrap(
                get_user_repository(),
                get_role_repository(),
                seed_email=settings.seed_super_admin_email,
                seed_password=settings.seed_super_admin_password,
                seed_full_name=settings.seed_super_admin_full_name,
            )
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise

        logger.info(
            "Dive log API starting up",
            extra={
                "app_env": settings.app_env,
                "storage": "postgres" if settings.uses_postgres() else "in-memory",
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )

        yield

    finally:
        close_pool()
        logger.info("Dive log API shutting down")


def _get_allowed_origins() -> list[str]:
    return get_settings().get_allowed_origins_list()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Scuba Dive Log API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Login and the current user"},
            {"name": "users", "description": "User management (admins)"},
            {"name": "roles", "description": "Role records (super admin only)"},
            {"name": "logbooks", "description": "Dive logs"},
        ],
    )

    # R: Added last runs first: RequestContext wraps CORS and routes.
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_allowed_origins(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(router, prefix=API_PREFIX)

    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    def root():
        return {"message": "Hello from Scuba dive log app!"}

    @app.get(f"{API_PREFIX}/status", tags=["status"])
    def status():
        return {"status": "Up and running!"}

    @app.get("/healthz", tags=["status"])
    def healthz(request: Request):
        """Repository ping; 503 when storage is unreachable."""
        request_id = getattr(request.state, "request_id", None)
        try:
            db_ok = get_user_repository().ping()
        except DatabaseError:
            db_ok = False

        payload = {
            "ok": db_ok,
            "db": "connected" if db_ok else "disconnected",
            "request_id": request_id,
        }
        if not db_ok:
            return JSONResponse(status_code=503, content=payload)
        return payload

    return app


app = create_app()
