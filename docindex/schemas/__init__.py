"""Pydantic request/response schemas for the API."""

from docindex.schemas.categorization import (
    CategorizationRequest,
    CategorizationResponse,
    TaxonomyResponse,
)
from docindex.schemas.document import DocumentListItem, DocumentResponse
from docindex.schemas.health import HealthResponse
from docindex.schemas.search import SearchResponse, SearchResultItemResponse

__all__ = [
    "CategorizationRequest",
    "CategorizationResponse",
    "DocumentListItem",
    "DocumentResponse",
    "HealthResponse",
    "SearchResponse",
    "SearchResultItemResponse",
    "TaxonomyResponse",
]
