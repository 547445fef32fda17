"""Document use cases: ingestion (write) and query (read)."""

from docindex.application.use_cases.documents.document_ingestion import (
    DocumentIngestionService,
    resolve_content_type,
)
from docindex.application.use_cases.documents.document_query import (
    DocumentQueryService,
)

__all__ = [
    "DocumentIngestionService",
    "DocumentQueryService",
    "resolve_content_type",
]
