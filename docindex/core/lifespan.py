"""Startup and shutdown hooks for the FastAPI app (shared inference client, SQL engine)."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from docindex.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open one pooled httpx client for inference calls; close it and the engine on exit."""
    settings = get_settings()

    app.state.llm_http_client = httpx.AsyncClient(
        timeout=settings.llm_timeout_seconds,
        limits=httpx.Limits(max_connections=settings.llm_max_connections),
    )
    if not settings.gemini_api_key.get_secret_value():
        logger.warning(
            "GEMINI_API_KEY is not set; documents will be indexed with the fallback categorization"
        )
    if not settings.sql_configured:
        logger.warning("DATABASE_URL is not set; document and search routes will return 503")

    yield

    if getattr(app.state, "llm_http_client", None) is not None:
        await app.state.llm_http_client.aclose()
        app.state.llm_http_client = None
        logger.info("Inference HTTP client closed")

    from docindex.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
