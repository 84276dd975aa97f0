"""
FastAPI Application Entry Point.

Serves the note board to renderers over HTTP. Each app built by
create_app() owns one in-memory board; nothing is persisted, so a
restart (or a --reload) starts from an empty board.

uvicorn loads ``modules.backend.main:app``; the app is built on first
access so that importing this module never reads configuration.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.backend.api import health
from modules.backend.api.v1 import router as api_v1_router
from modules.backend.core.config import get_app_config, get_settings
from modules.backend.core.exception_handlers import register_exception_handlers
from modules.backend.core.logging import get_logger, setup_logging
from modules.backend.core.middleware import RequestContextMiddleware
from modules.backend.services.note import NoteService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    board = app.state.note_service
    logger.info(
        "Board open",
        extra={"app_name": app.title, "palette": list(board.palette), "default_sort": board.default_sort.value},
    )
    yield
    logger.info("Board closed", extra={"notes": len(board.store), "version": board.store.version})


def create_app() -> FastAPI:
    """Build the app around a fresh, empty board."""
    config = get_app_config()
    application = config.application

    app = FastAPI(
        title=application.name,
        description=application.description,
        version=application.version,
        docs_url="/docs" if application.debug else None,
        redoc_url="/redoc" if application.debug else None,
        lifespan=lifespan,
    )
    app.state.note_service = NoteService.from_config(config.board, seed=get_settings().random_seed)

    app.add_middleware(RequestContextMiddleware)
    if application.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=application.cors.origins,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Response-Time"],
        )
    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=application.api_prefix)
    return app


@lru_cache
def get_app() -> FastAPI:
    return create_app()


def __getattr__(name: str) -> FastAPI:
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
