"""Full-text search use case. Delegates to ISearchRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docindex.application.dtos.document import DocumentFilters
from docindex.application.dtos.search import SearchResultItem

if TYPE_CHECKING:
    from docindex.application.interfaces.repositories import ISearchRepository


class SearchService:
    """Full-text search over indexed documents, optionally narrowed by category."""

    def __init__(self, search_repo: "ISearchRepository") -> None:
        self.search_repo = search_repo

    async def search(
        self,
        q: str,
        limit: int = 50,
        topic: str | None = None,
        project: str | None = None,
        team: str | None = None,
    ) -> list[SearchResultItem]:
        """Search document title and content. A blank query matches nothing."""
        query = (q or "").strip()
        if not query:
            return []
        return await self.search_repo.search(
            q=query,
            filters=DocumentFilters(topic=topic, project=project, team=team),
            limit=limit,
        )
