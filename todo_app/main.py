"""
FastAPI application entry point.
Mounts routes, CORS for the single frontend origin, Prometheus metrics,
exception handlers and the static single-page client.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from todo_app.api.router import api_router, auth_router
from todo_app.cache.redis_client import close_redis
from todo_app.config import get_settings
from todo_app.core.errors import install_exception_handlers
from todo_app.core.logging import setup_logging
from todo_app.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Schema must already exist (scripts/init_db.py). Shutdown: release pools."""
    logger.info("Starting %s", app.title)
    yield
    await close_redis()
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="Personal to-do list: session-authenticated CRUD with local and Google login.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # One known frontend origin; credentials needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_exception_handlers(app)

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(auth_router, prefix="/auth")
    app.include_router(api_router, prefix="/api")

    # Single-page client (static)
    static_dir = Path(__file__).resolve().parent.parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

        @app.get("/", include_in_schema=False)
        async def root():
            return FileResponse(static_dir / "index.html")

    return app


app = create_app()
