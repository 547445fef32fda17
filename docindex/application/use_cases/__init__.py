"""Application use cases: one entry point per workflow."""

from docindex.application.use_cases.documents import (
    DocumentIngestionService,
    DocumentQueryService,
)
from docindex.application.use_cases.search import SearchService

__all__ = [
    "DocumentIngestionService",
    "DocumentQueryService",
    "SearchService",
]
