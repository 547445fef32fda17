"""Document queries: record lookup, filtered listing, and file streaming."""

from __future__ import annotations

from collections.abc import AsyncIterator

from docindex.application.dtos.document import (
    DocumentFilters,
    DocumentListItem,
    DocumentResult,
)
from docindex.application.interfaces.repositories import IDocumentRepository
from docindex.application.interfaces.storage import IStorageService
from docindex.domain.exceptions import ResourceNotFoundException


class DocumentQueryService:
    """Single responsibility: read indexed documents and their stored files."""

    def __init__(
        self,
        storage_service: IStorageService,
        document_repo: IDocumentRepository,
    ) -> None:
        self.storage = storage_service
        self.document_repo = document_repo

    async def get_document(self, document_id: str) -> DocumentResult:
        """Return the document; raise ResourceNotFoundException if missing."""
        doc = await self.document_repo.get_by_id(document_id)
        if not doc:
            raise ResourceNotFoundException("document", document_id)
        return doc

    async def list_documents(
        self,
        limit: int = 50,
        offset: int = 0,
        topic: str | None = None,
        project: str | None = None,
        team: str | None = None,
    ) -> list[DocumentListItem]:
        return await self.document_repo.list_documents(
            DocumentFilters(topic=topic, project=project, team=team),
            skip=offset,
            limit=limit,
        )

    async def open_file(
        self, document_id: str
    ) -> tuple[DocumentResult, AsyncIterator[bytes]]:
        """Return the document and an iterator over its stored bytes.

        The first chunk is read eagerly so a missing object raises here
        (StorageNotFoundError) instead of after a response has started.
        """
        doc = await self.get_document(document_id)
        stream = self.storage.download(doc.storage_ref)
        try:
            first = await anext(stream)
        except StopAsyncIteration:
            first = b""

        async def _chained() -> AsyncIterator[bytes]:
            if first:
                yield first
            async for chunk in stream:
                yield chunk

        return doc, _chained()
