"""Search API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SearchResultItemResponse(BaseModel):
    """Single search hit."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    file_url: str
    topic: str
    project: str
    team: str
    snippet: str | None = None
    rank: float
    created_at: datetime | None = None


class SearchResponse(BaseModel):
    """Full-text search response (hits ordered by rank)."""

    results: list[SearchResultItemResponse]
