"""Plain-text extraction from uploaded documents (PDF, DOCX, text)."""

from __future__ import annotations

import io
from pathlib import PurePath

import docx
from pypdf import PdfReader

from docindex.infrastructure.exceptions import (
    TextExtractionError,
    UnsupportedDocumentTypeError,
)
from docindex.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_EXTENSIONS = frozenset({".txt", ".md", ".csv"})


class TextExtractor:
    """Synchronous extractor; callers run it in a worker thread."""

    def extract(self, data: bytes, filename: str, mime_type: str) -> str:
        ext = PurePath(filename).suffix.lower()
        mime = (mime_type or "").split(";")[0].strip().lower()

        if mime == PDF_MIME or ext == ".pdf":
            return self._extract_pdf(data, filename)
        if mime == DOCX_MIME or ext == ".docx":
            return self._extract_docx(data, filename)
        if mime.startswith("text/") or ext in TEXT_EXTENSIONS:
            return data.decode("utf-8", errors="replace").strip()
        raise UnsupportedDocumentTypeError(filename, mime_type)

    def _extract_pdf(self, data: bytes, filename: str) -> str:
        try:
            reader = PdfReader(io.BytesIO(data))
            parts = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            # pypdf raises PyPdfError plus assorted builtin errors on malformed streams
            logger.warning("PDF extraction failed for %s: %s", filename, e)
            raise TextExtractionError(filename, str(e)) from e
        return "\n".join(parts).strip()

    def _extract_docx(self, data: bytes, filename: str) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
        except Exception as e:
            # python-docx surfaces zip, XML and package errors without a common base
            logger.warning("DOCX extraction failed for %s: %s", filename, e)
            raise TextExtractionError(filename, str(e)) from e
        parts = [p.text for p in document.paragraphs if p.text]
        return "\n".join(parts).strip()
