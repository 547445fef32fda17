"""Shared utilities: UTC clock and document id generation."""

from docindex.shared.utils.datetime import utc_now
from docindex.shared.utils.ids import generate_document_id

__all__ = ["generate_document_id", "utc_now"]
