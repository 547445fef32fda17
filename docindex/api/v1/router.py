"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from docindex.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from docindex.api.v1.endpoints import categorizations, documents, health, search

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(
    categorizations.router, prefix="/categorizations", tags=["categorizations"]
)
