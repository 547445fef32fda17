"""Document ingestion: extract text, categorize, store the file, and index the record."""

from __future__ import annotations

import asyncio
import hashlib
import os
from typing import BinaryIO

from docindex.application.dtos.document import DocumentCreate, DocumentResult
from docindex.application.interfaces.repositories import IDocumentRepository
from docindex.application.interfaces.services import ICategorizer, ITextExtractor
from docindex.application.interfaces.storage import IStorageService
from docindex.domain.exceptions import DuplicateDocumentException, ValidationException
from docindex.shared.telemetry.logging import get_logger
from docindex.shared.utils.ids import generate_document_id

logger = get_logger(__name__)

OCTET_STREAM = "application/octet-stream"

_CONTENT_TYPES_BY_EXTENSION = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def _rewind_if_seekable(file_data: BinaryIO) -> None:
    """Reset file position to start if stream is seekable."""
    seekable = getattr(file_data, "seekable", None)
    if seekable is not None and seekable():
        file_data.seek(0)


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and dangerous characters from filename."""
    name = os.path.basename((filename or "").replace("\\", "/"))
    name = name.replace("\x00", "").strip(". ")
    if not name:
        raise ValidationException(
            "Filename is empty or invalid after sanitization", field="file"
        )
    return name


def _compute_checksum_and_size_sync(file_data: BinaryIO) -> tuple[str, int]:
    """Blocking: one pass over file_data (run in executor). Returns (hexdigest, byte_count)."""
    sha256 = hashlib.sha256()
    total = 0
    while chunk := file_data.read(65536):
        sha256.update(chunk)
        total += len(chunk)
    _rewind_if_seekable(file_data)
    return sha256.hexdigest(), total


def _read_all_sync(file_data: BinaryIO) -> bytes:
    _rewind_if_seekable(file_data)
    data = file_data.read()
    _rewind_if_seekable(file_data)
    return data


def resolve_content_type(filename: str, declared: str | None) -> str:
    """Declared type wins unless missing or generic; otherwise infer from extension."""
    if declared and declared != OCTET_STREAM:
        return declared
    ext = os.path.splitext(filename)[1].lower()
    return _CONTENT_TYPES_BY_EXTENSION.get(ext, OCTET_STREAM)


class DocumentIngestionService:
    """Upload pipeline: validate, extract, categorize, store, and insert one document.

    Categorization is best-effort (the categorizer returns the fallback
    triple on any failure), so a document is always indexed even when
    the inference endpoint is down. If the record insert fails after the
    file was stored, the stored object is deleted before re-raising.
    """

    def __init__(
        self,
        storage_service: IStorageService,
        document_repo: IDocumentRepository,
        text_extractor: ITextExtractor,
        categorizer: ICategorizer,
        max_upload_size: int,
    ) -> None:
        self.storage = storage_service
        self.document_repo = document_repo
        self.text_extractor = text_extractor
        self.categorizer = categorizer
        self.max_upload_size = max_upload_size

    @staticmethod
    def _generate_storage_ref(document_id: str, filename: str) -> str:
        return f"documents/{document_id}/{filename}"

    async def _compute_checksum_and_size(self, file_data: BinaryIO) -> tuple[str, int]:
        return await asyncio.to_thread(_compute_checksum_and_size_sync, file_data)

    async def _extract_text(
        self, file_data: BinaryIO, filename: str, mime_type: str
    ) -> str:
        data = await asyncio.to_thread(_read_all_sync, file_data)
        return await asyncio.to_thread(
            self.text_extractor.extract, data, filename, mime_type
        )

    async def ingest(
        self,
        file_data: BinaryIO,
        filename: str,
        title: str,
        mime_type: str | None = None,
        content: str | None = None,
    ) -> DocumentResult:
        """Index one uploaded file and return the stored record.

        Args:
            file_data: Readable binary stream with the file bytes.
            filename: Client-supplied file name (sanitized here).
            title: Document title; must be non-blank.
            mime_type: Declared content type, if any.
            content: Pre-extracted text; when omitted, text is extracted
                from the file.

        Raises:
            ValidationException: Bad filename or title, empty/oversized
                file, unsupported type, or no text to index.
            DuplicateDocumentException: Same bytes are already indexed.
        """
        safe_name = _sanitize_filename(filename)
        title = (title or "").strip()
        if not title:
            raise ValidationException("Title is required", field="title")
        content_type = resolve_content_type(safe_name, mime_type)

        _rewind_if_seekable(file_data)
        checksum, file_size = await self._compute_checksum_and_size(file_data)
        if file_size == 0:
            raise ValidationException("Uploaded file is empty", field="file")
        if file_size > self.max_upload_size:
            raise ValidationException(
                f"File exceeds maximum upload size of {self.max_upload_size} bytes",
                field="file",
            )

        existing = await self.document_repo.get_by_checksum(checksum)
        if existing:
            raise DuplicateDocumentException(checksum, existing.id)

        if content is not None and content.strip():
            text = content
        else:
            text = await self._extract_text(file_data, safe_name, content_type)
        if not text.strip():
            raise ValidationException(
                "No text content could be extracted from the document", field="content"
            )

        categorization = await self.categorizer.categorize(text)

        document_id = generate_document_id()
        storage_ref = self._generate_storage_ref(document_id, safe_name)
        _rewind_if_seekable(file_data)
        await self.storage.upload(
            file_data=file_data,
            storage_ref=storage_ref,
            expected_checksum=checksum,
            content_type=content_type,
            metadata={"document_id": document_id},
        )

        create_dto = DocumentCreate(
            id=document_id,
            title=title,
            original_filename=safe_name,
            mime_type=content_type,
            file_size=file_size,
            checksum=checksum,
            storage_ref=storage_ref,
            file_url=self.storage.get_public_url(storage_ref),
            content=text,
            topic=categorization.topic,
            project=categorization.project,
            team=categorization.team,
        )
        try:
            created = await self.document_repo.create_document(create_dto)
        except Exception:
            logger.error(
                "Document insert failed; removing stored object %s", storage_ref
            )
            try:
                await self.storage.delete(storage_ref)
            except Exception:
                logger.exception("Failed to remove orphaned object %s", storage_ref)
            raise

        logger.info(
            "Indexed document %s (%s) as topic=%r project=%r team=%r",
            created.id,
            safe_name,
            created.topic,
            created.project,
            created.team,
        )
        return created
