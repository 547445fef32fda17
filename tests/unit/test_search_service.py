"""Tests for SearchService and SearchRepository argument handling (no database)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from docindex.application.dtos.document import DocumentFilters
from docindex.application.use_cases.search import SearchService
from docindex.infrastructure.persistence.repositories.search_repo import (
    MAX_SEARCH_LIMIT,
    SearchRepository,
)


@pytest.fixture
def repo() -> MagicMock:
    repo = MagicMock()
    repo.search = AsyncMock(return_value=[])
    return repo


@pytest.mark.parametrize("q", ["", "   ", "\t\n"])
async def test_blank_query_returns_no_results(repo: MagicMock, q: str) -> None:
    assert await SearchService(repo).search(q) == []
    repo.search.assert_not_awaited()


async def test_query_is_stripped_and_filters_passed_through(repo: MagicMock) -> None:
    await SearchService(repo).search("  revenue  ", limit=10, topic="Quarterly Review", team="Executive")
    repo.search.assert_awaited_once_with(
        q="revenue",
        filters=DocumentFilters(topic="Quarterly Review", project=None, team="Executive"),
        limit=10,
    )


def _session() -> MagicMock:
    result = MagicMock()
    result.mappings.return_value.all.return_value = []
    db = MagicMock()
    db.execute = AsyncMock(return_value=result)
    return db


@pytest.mark.parametrize(("requested", "applied"), [(0, 1), (-5, 1), (25, 25), (500, MAX_SEARCH_LIMIT)])
async def test_repository_clamps_limit(requested: int, applied: int) -> None:
    db = _session()
    await SearchRepository(db).search("revenue", DocumentFilters(), limit=requested)
    params = db.execute.await_args.args[1]
    assert params["limit"] == applied


async def test_repository_binds_only_given_filters() -> None:
    db = _session()
    await SearchRepository(db).search("revenue", DocumentFilters(project="Brand Book Update"))
    params = db.execute.await_args.args[1]
    assert params == {"q": "revenue", "limit": 50, "project": "Brand Book Update"}


async def test_repository_blank_query_skips_database() -> None:
    db = _session()
    assert await SearchRepository(db).search("  ", DocumentFilters()) == []
    db.execute.assert_not_awaited()
