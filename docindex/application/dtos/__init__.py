"""Application DTOs: write-models and read-models passed between layers."""

from docindex.application.dtos.document import (
    DocumentCreate,
    DocumentFilters,
    DocumentListItem,
    DocumentResult,
)
from docindex.application.dtos.search import SearchResultItem

__all__ = [
    "DocumentCreate",
    "DocumentFilters",
    "DocumentListItem",
    "DocumentResult",
    "SearchResultItem",
]
