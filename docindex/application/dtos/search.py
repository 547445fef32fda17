"""DTOs for full-text search results (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SearchResultItem:
    """Single search hit (read-model), ordered by rank within a result list."""

    id: str
    title: str
    file_url: str
    topic: str
    project: str
    team: str
    snippet: str | None
    rank: float
    created_at: datetime | None = None
