"""Full-text search repository. Uses the PostgreSQL tsvector on document."""

from __future__ import annotations

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from docindex.application.dtos.document import DocumentFilters
from docindex.application.dtos.search import SearchResultItem

MAX_SEARCH_LIMIT = 100

_FILTER_COLUMNS = ("topic", "project", "team")


class SearchRepository:
    """Web-search style full-text search over document title and content."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def search(
        self,
        q: str,
        filters: DocumentFilters,
        limit: int = 50,
    ) -> list[SearchResultItem]:
        """Ranked hits for q (websearch_to_tsquery syntax: quotes, OR, -term)."""
        if not q or not q.strip():
            return []
        limit = min(max(1, limit), MAX_SEARCH_LIMIT)
        params: dict[str, Any] = {"q": q.strip(), "limit": limit}

        clauses = ["d.search_vector @@ websearch_to_tsquery('english', :q)"]
        for column in _FILTER_COLUMNS:
            value = getattr(filters, column)
            if value is not None:
                # column names come from the fixed tuple above, values are bound
                clauses.append(f"d.{column} = :{column}")
                params[column] = value

        stmt = text(f"""
            SELECT d.id, d.title, d.file_url, d.topic, d.project, d.team, d.created_at,
                   ts_headline('english', coalesce(d.content, ''),
                     websearch_to_tsquery('english', :q), 'MaxFragments=1, MaxWords=30, MinWords=15') AS snippet,
                   ts_rank(d.search_vector, websearch_to_tsquery('english', :q)) AS rank
            FROM document d
            WHERE {" AND ".join(clauses)}
            ORDER BY rank DESC, d.created_at DESC
            LIMIT :limit
        """)
        r = await self.db.execute(stmt, params)
        rows = r.mappings().all()
        return [
            SearchResultItem(
                id=row["id"],
                title=row["title"],
                file_url=row["file_url"],
                topic=row["topic"],
                project=row["project"],
                team=row["team"],
                snippet=row["snippet"] if row["snippet"] else None,
                rank=float(row["rank"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]
