"""Unit tests for DocumentIngestionService (collaborators mocked)."""

import hashlib
import io
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from docindex.application.dtos.document import DocumentCreate, DocumentResult
from docindex.application.use_cases.documents.document_ingestion import (
    DocumentIngestionService,
    _rewind_if_seekable,
    _sanitize_filename,
    resolve_content_type,
)
from docindex.domain.exceptions import DuplicateDocumentException, ValidationException
from docindex.domain.taxonomy import DEFAULT_CATEGORIZATION, CategorizationResult

PDF_BYTES = b"%PDF-1.4 fake pdf bytes"


def _result_from(create: DocumentCreate) -> DocumentResult:
    return DocumentResult(
        id=create.id,
        title=create.title,
        original_filename=create.original_filename,
        mime_type=create.mime_type,
        file_size=create.file_size,
        checksum=create.checksum,
        storage_ref=create.storage_ref,
        file_url=create.file_url,
        content=create.content,
        topic=create.topic,
        project=create.project,
        team=create.team,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def storage() -> MagicMock:
    mock = MagicMock()
    mock.upload = AsyncMock(return_value={})
    mock.delete = AsyncMock(return_value=True)
    mock.get_public_url = MagicMock(
        side_effect=lambda ref: f"https://files.test/{ref}"
    )
    return mock


@pytest.fixture
def document_repo() -> MagicMock:
    mock = MagicMock()
    mock.get_by_checksum = AsyncMock(return_value=None)
    mock.create_document = AsyncMock(side_effect=_result_from)
    return mock


@pytest.fixture
def text_extractor() -> MagicMock:
    mock = MagicMock()
    mock.extract = MagicMock(return_value="Quarterly numbers for Q4")
    return mock


@pytest.fixture
def categorizer() -> MagicMock:
    mock = MagicMock()
    mock.categorize = AsyncMock(
        return_value=CategorizationResult("Quarterly Review", "Q4 Strategy 2024", "Executive")
    )
    return mock


@pytest.fixture
def service(storage, document_repo, text_extractor, categorizer) -> DocumentIngestionService:
    return DocumentIngestionService(
        storage_service=storage,
        document_repo=document_repo,
        text_extractor=text_extractor,
        categorizer=categorizer,
        max_upload_size=1024,
    )


class TestIngest:
    """Happy path and failure handling for ingest()."""

    async def test_indexes_document_with_categorization(
        self, service, storage, document_repo, text_extractor, categorizer
    ) -> None:
        result = await service.ingest(
            io.BytesIO(PDF_BYTES), "report.pdf", "Q4 report", "application/pdf"
        )

        text_extractor.extract.assert_called_once_with(
            PDF_BYTES, "report.pdf", "application/pdf"
        )
        categorizer.categorize.assert_awaited_once_with("Quarterly numbers for Q4")
        create: DocumentCreate = document_repo.create_document.await_args.args[0]
        assert create.checksum == hashlib.sha256(PDF_BYTES).hexdigest()
        assert create.file_size == len(PDF_BYTES)
        assert create.storage_ref == f"documents/{create.id}/report.pdf"
        assert create.file_url == f"https://files.test/{create.storage_ref}"
        assert (create.topic, create.project, create.team) == (
            "Quarterly Review",
            "Q4 Strategy 2024",
            "Executive",
        )
        storage.upload.assert_awaited_once()
        assert storage.upload.await_args.kwargs["expected_checksum"] == create.checksum
        assert result.id == create.id

    async def test_provided_content_skips_extraction(
        self, service, text_extractor, categorizer
    ) -> None:
        await service.ingest(
            io.BytesIO(PDF_BYTES), "report.pdf", "Q4", "application/pdf", content="given text"
        )
        text_extractor.extract.assert_not_called()
        categorizer.categorize.assert_awaited_once_with("given text")

    async def test_fallback_categorization_is_still_indexed(
        self, service, document_repo, categorizer
    ) -> None:
        categorizer.categorize.return_value = DEFAULT_CATEGORIZATION
        result = await service.ingest(io.BytesIO(PDF_BYTES), "a.pdf", "A", "application/pdf")
        assert (result.topic, result.project, result.team) == (
            "Uncategorized",
            "N/A",
            "Operations",
        )

    async def test_duplicate_checksum_raises(self, service, document_repo, storage) -> None:
        document_repo.get_by_checksum.return_value = MagicMock(id="existing-id")
        with pytest.raises(DuplicateDocumentException) as exc_info:
            await service.ingest(io.BytesIO(PDF_BYTES), "a.pdf", "A", "application/pdf")
        assert exc_info.value.details["document_id"] == "existing-id"
        storage.upload.assert_not_awaited()

    async def test_empty_file_raises(self, service) -> None:
        with pytest.raises(ValidationException, match="empty"):
            await service.ingest(io.BytesIO(b""), "a.pdf", "A", "application/pdf")

    async def test_oversized_file_raises(self, service) -> None:
        with pytest.raises(ValidationException, match="maximum upload size"):
            await service.ingest(io.BytesIO(b"x" * 2048), "a.txt", "A", "text/plain")

    async def test_blank_title_raises(self, service) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await service.ingest(io.BytesIO(PDF_BYTES), "a.pdf", "   ", "application/pdf")
        assert exc_info.value.details == {"field": "title"}

    async def test_no_extractable_text_raises(
        self, service, text_extractor, categorizer
    ) -> None:
        text_extractor.extract.return_value = "   "
        with pytest.raises(ValidationException, match="No text content"):
            await service.ingest(io.BytesIO(PDF_BYTES), "scan.pdf", "Scan", "application/pdf")
        categorizer.categorize.assert_not_awaited()

    async def test_insert_failure_removes_stored_object(
        self, service, document_repo, storage
    ) -> None:
        document_repo.create_document.side_effect = RuntimeError("db down")
        with pytest.raises(RuntimeError, match="db down"):
            await service.ingest(io.BytesIO(PDF_BYTES), "a.pdf", "A", "application/pdf")
        stored_ref = storage.upload.await_args.kwargs["storage_ref"]
        storage.delete.assert_awaited_once_with(stored_ref)

    async def test_content_type_inferred_when_generic(self, service, document_repo) -> None:
        await service.ingest(
            io.BytesIO(PDF_BYTES), "a.pdf", "A", "application/octet-stream"
        )
        create: DocumentCreate = document_repo.create_document.await_args.args[0]
        assert create.mime_type == "application/pdf"


class TestSanitizeFilename:
    """Tests for _sanitize_filename."""

    def test_basename_only(self) -> None:
        assert _sanitize_filename("report.pdf") == "report.pdf"

    def test_path_stripped(self) -> None:
        assert _sanitize_filename("/foo/bar/report.pdf") == "report.pdf"

    def test_windows_path_stripped(self) -> None:
        assert _sanitize_filename("C:\\docs\\report.pdf") == "report.pdf"

    def test_null_removed(self) -> None:
        assert _sanitize_filename("a\x00b.pdf") == "ab.pdf"

    def test_empty_after_sanitize_raises(self) -> None:
        with pytest.raises(ValidationException, match="empty or invalid"):
            _sanitize_filename("..")


class TestResolveContentType:
    def test_declared_type_wins(self) -> None:
        assert resolve_content_type("a.pdf", "text/plain") == "text/plain"

    def test_by_extension(self) -> None:
        assert resolve_content_type("a.PDF", None) == "application/pdf"
        assert resolve_content_type("b.docx", "application/octet-stream") == (
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )

    def test_unknown_extension(self) -> None:
        assert resolve_content_type("c.bin", None) == "application/octet-stream"


def test_rewind_checks_seekable_once_and_rewinds() -> None:
    stream = MagicMock()
    stream.seekable.return_value = True
    _rewind_if_seekable(stream)
    stream.seekable.assert_called_once_with()
    stream.seek.assert_called_once_with(0)


def test_rewind_skips_streams_without_seek() -> None:
    class ReadOnly:
        def read(self) -> bytes:
            return b""

    _rewind_if_seekable(ReadOnly())

    consumed = io.BytesIO(b"abc")
    consumed.read()
    _rewind_if_seekable(consumed)
    assert consumed.read() == b"abc"
