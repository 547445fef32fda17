"""Categorization preview API schemas."""

from pydantic import BaseModel, Field


class CategorizationRequest(BaseModel):
    """Body for POST /categorizations."""

    content: str = Field(..., min_length=1, description="Document text to classify")


class CategorizationResponse(BaseModel):
    """Categorization triple (fallback values when inference fails)."""

    topic: str
    project: str
    team: str


class TaxonomyResponse(BaseModel):
    """Configured taxonomy (GET /categorizations/taxonomy)."""

    topics: list[str]
    projects: list[str]
    teams: list[str]
    fallback: CategorizationResponse
