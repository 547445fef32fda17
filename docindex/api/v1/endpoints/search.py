"""Search API: full-text search over document title and content."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from docindex.api.v1.dependencies import get_search_service
from docindex.application.use_cases.search import SearchService
from docindex.schemas.search import SearchResponse, SearchResultItemResponse

router = APIRouter()


@router.get("", response_model=SearchResponse)
async def search(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query(..., min_length=1, max_length=500, description="Web-search syntax"),
    limit: int = Query(50, ge=1, le=100),
    topic: str | None = Query(None),
    project: str | None = Query(None),
    team: str | None = Query(None),
):
    """Ranked full-text search; supports quoted phrases, OR, and -exclusion."""
    items = await search_svc.search(
        q=q, limit=limit, topic=topic, project=project, team=team
    )
    return SearchResponse(
        results=[SearchResultItemResponse.model_validate(i) for i in items]
    )
