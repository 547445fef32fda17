"""Document repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from docindex.application.dtos.document import (
    DocumentCreate,
    DocumentFilters,
    DocumentListItem,
    DocumentResult,
)
from docindex.domain.exceptions import DuplicateDocumentException
from docindex.infrastructure.persistence.models.document import Document


def _create_to_document(d: DocumentCreate) -> Document:
    """Map DocumentCreate (write-model) to ORM Document for persistence."""
    return Document(
        id=d.id,
        title=d.title,
        original_filename=d.original_filename,
        mime_type=d.mime_type,
        file_size=d.file_size,
        checksum=d.checksum,
        storage_ref=d.storage_ref,
        file_url=d.file_url,
        content=d.content,
        topic=d.topic,
        project=d.project,
        team=d.team,
    )


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        title=d.title,
        original_filename=d.original_filename,
        mime_type=d.mime_type,
        file_size=d.file_size,
        checksum=d.checksum,
        storage_ref=d.storage_ref,
        file_url=d.file_url,
        content=d.content,
        topic=d.topic,
        project=d.project,
        team=d.team,
        created_at=d.created_at,
    )


def _document_to_list_item(d: Document) -> DocumentListItem:
    return DocumentListItem(
        id=d.id,
        title=d.title,
        original_filename=d.original_filename,
        mime_type=d.mime_type,
        file_size=d.file_size,
        file_url=d.file_url,
        topic=d.topic,
        project=d.project,
        team=d.team,
        created_at=d.created_at,
    )


class DocumentRepository:
    """Document repository. create_document() accepts DocumentCreate (write-model); returns DocumentResult (read-model)."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_document(self, document: DocumentCreate) -> DocumentResult:
        """Insert and flush so server defaults (created_at) are loaded."""
        orm = _create_to_document(document)
        self.db.add(orm)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # concurrent upload of the same content won the unique checksum index
            raise DuplicateDocumentException(document.checksum) from e
        await self.db.refresh(orm, attribute_names=["created_at", "updated_at"])
        return _document_to_result(orm)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        result = await self.db.execute(
            select(Document).where(Document.id == document_id)
        )
        row = result.scalar_one_or_none()
        return _document_to_result(row) if row else None

    async def get_by_checksum(self, checksum: str) -> DocumentResult | None:
        result = await self.db.execute(
            select(Document).where(Document.checksum == checksum)
        )
        row = result.scalar_one_or_none()
        return _document_to_result(row) if row else None

    async def list_documents(
        self,
        filters: DocumentFilters,
        skip: int = 0,
        limit: int = 50,
    ) -> list[DocumentListItem]:
        """Newest first; filters are exact matches on topic/project/team."""
        stmt = select(Document)
        if filters.topic is not None:
            stmt = stmt.where(Document.topic == filters.topic)
        if filters.project is not None:
            stmt = stmt.where(Document.project == filters.project)
        if filters.team is not None:
            stmt = stmt.where(Document.team == filters.team)
        stmt = (
            stmt.order_by(Document.created_at.desc(), Document.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_document_to_list_item(row) for row in result.scalars().all()]
