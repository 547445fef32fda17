"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the categorizer, and
application use cases. All use cases are built from infrastructure
implementations here; routes depend only on these dependencies, not on
infra directly. Tests replace them through app.dependency_overrides.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from docindex.application.interfaces.storage import IStorageService
from docindex.application.services.categorizer import Categorizer, CategorizerConfig
from docindex.application.use_cases.documents import (
    DocumentIngestionService,
    DocumentQueryService,
)
from docindex.application.use_cases.search import SearchService
from docindex.core.config import Settings, get_settings
from docindex.infrastructure.external.extraction import TextExtractor
from docindex.infrastructure.external.llm import GeminiClient
from docindex.infrastructure.external.storage import StorageFactory
from docindex.infrastructure.persistence.database import get_db, get_db_transactional
from docindex.infrastructure.persistence.repositories import (
    DocumentRepository,
    SearchRepository,
)


def get_app_settings() -> Settings:
    return get_settings()


def get_storage_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> IStorageService:
    """Storage backend selected by STORAGE_BACKEND."""
    return StorageFactory.create_storage_service(settings)


async def get_categorizer(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AsyncIterator[Categorizer]:
    """Categorizer over the shared inference HTTP client from lifespan.

    Without a running lifespan (e.g. a bare ASGI transport) the Gemini
    client owns a private connection pool, closed when the request ends.
    """
    shared = getattr(request.app.state, "llm_http_client", None)
    client = GeminiClient(
        api_key=settings.gemini_api_key.get_secret_value(),
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.llm_timeout_seconds,
        http_client=shared,
    )
    try:
        yield Categorizer(CategorizerConfig.from_settings(settings), client)
    finally:
        await client.aclose()


async def get_document_ingestion_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
    categorizer: Annotated[Categorizer, Depends(get_categorizer)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> DocumentIngestionService:
    """Build DocumentIngestionService (transactional session; commit after the route returns)."""
    return DocumentIngestionService(
        storage_service=storage,
        document_repo=DocumentRepository(db),
        text_extractor=TextExtractor(),
        categorizer=categorizer,
        max_upload_size=settings.max_upload_size,
    )


async def get_document_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> DocumentQueryService:
    """Build DocumentQueryService for record lookup, listing, and file streaming."""
    return DocumentQueryService(
        storage_service=storage,
        document_repo=DocumentRepository(db),
    )


async def get_search_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SearchService:
    return SearchService(SearchRepository(db))
