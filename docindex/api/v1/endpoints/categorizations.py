"""Categorization API: preview the categorizer without storing anything."""

from typing import Annotated

from fastapi import APIRouter, Depends

from docindex.api.v1.dependencies import get_app_settings, get_categorizer
from docindex.application.services.categorizer import Categorizer
from docindex.core.config import Settings
from docindex.schemas.categorization import (
    CategorizationRequest,
    CategorizationResponse,
    TaxonomyResponse,
)

router = APIRouter()


@router.post("", response_model=CategorizationResponse)
async def categorize(
    body: CategorizationRequest,
    categorizer: Annotated[Categorizer, Depends(get_categorizer)],
) -> CategorizationResponse:
    """Categorize text. Always 200; inference failures yield the fallback triple."""
    result = await categorizer.categorize(body.content)
    return CategorizationResponse(**result.to_dict())


@router.get("/taxonomy", response_model=TaxonomyResponse)
def get_taxonomy(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TaxonomyResponse:
    """Return the configured topic/project/team lists and fallbacks."""
    taxonomy = settings.build_taxonomy()
    return TaxonomyResponse(
        topics=list(taxonomy.topics),
        projects=list(taxonomy.projects),
        teams=list(taxonomy.teams),
        fallback=CategorizationResponse(**taxonomy.default_result().to_dict()),
    )
