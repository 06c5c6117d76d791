"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tiobe_service.config import get_settings
from tiobe_service.core.exceptions import register_exception_handlers
from tiobe_service.core.lifespan import lifespan
from tiobe_service.routers import health, info, languages

DOCS_URL = "/swagger-ui"
OPENAPI_URL = "/api-docs/openapi.json"


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.service.name} Service",
        description="TIOBE programming language index API",
        version=settings.service.version,
        lifespan=lifespan,
        docs_url=DOCS_URL,
        openapi_url=OPENAPI_URL,
        redoc_url=None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Operations"])
    app.include_router(info.router, tags=["Operations"])
    app.include_router(languages.router, tags=["Languages"])

    # Mounted last so API routes take precedence over files
    static_dir = Path(settings.static.directory)
    app.mount("/", StaticFiles(directory=static_dir, html=True, check_dir=False), name="static")

    return app
