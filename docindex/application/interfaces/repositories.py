"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from docindex.application.dtos.document import (
        DocumentCreate,
        DocumentFilters,
        DocumentListItem,
        DocumentResult,
    )
    from docindex.application.dtos.search import SearchResultItem


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for document repository (relational store collaborator)."""

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        """Insert a document record and return it as stored."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID, or None."""

    async def get_by_checksum(self, checksum: str) -> DocumentResult | None:
        """Return document with this content checksum, or None."""

    async def list_documents(
        self,
        filters: DocumentFilters,
        skip: int = 0,
        limit: int = 50,
    ) -> list[DocumentListItem]:
        """Return documents newest first, optionally filtered by category fields."""


# Search repository interface
class ISearchRepository(Protocol):
    """Protocol for full-text search over indexed documents."""

    async def search(
        self,
        q: str,
        filters: DocumentFilters,
        limit: int = 50,
    ) -> list[SearchResultItem]:
        """Return ranked hits for a web-search style query."""
