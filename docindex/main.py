"""ASGI entry point: ``uvicorn docindex.main:app``.

create_app() reads settings when called, so tests can adjust the
environment (and clear the settings cache) first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docindex.api.v1.router import api_router
from docindex.core.config import get_settings
from docindex.core.exception_handlers import register_exception_handlers
from docindex.core.lifespan import create_lifespan
from docindex.shared.telemetry.logging import setup_logging

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    register_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )
    app.include_router(api_router, prefix=API_PREFIX)
    return app


app = create_app()
