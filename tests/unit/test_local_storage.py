"""Tests for LocalStorageService (atomic upload, streaming, delete, public URLs)."""

import hashlib
import io
from pathlib import Path

import pytest

from docindex.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageNotFoundError,
    StoragePermissionError,
)
from docindex.infrastructure.external.storage.local_storage import LocalStorageService

DATA = b"hello storage" * 1000
CHECKSUM = hashlib.sha256(DATA).hexdigest()
REF = "documents/doc1/report.pdf"


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorageService:
    return LocalStorageService(str(tmp_path))


async def _read_all(storage: LocalStorageService, ref: str) -> bytes:
    return b"".join([chunk async for chunk in storage.download(ref)])


async def test_upload_then_download(storage: LocalStorageService) -> None:
    info = await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")
    assert info["checksum"] == CHECKSUM
    assert info["size"] == len(DATA)
    assert await _read_all(storage, REF) == DATA


async def test_upload_is_idempotent_for_same_content(storage: LocalStorageService) -> None:
    first = await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")
    again = await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")
    assert again["checksum"] == CHECKSUM
    assert again["uploaded_at"] == first["uploaded_at"]
    assert again.keys() == first.keys()


async def test_upload_different_content_same_ref_raises(storage: LocalStorageService) -> None:
    await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")
    other = b"other"
    with pytest.raises(StorageAlreadyExistsError):
        await storage.upload(
            io.BytesIO(other), REF, hashlib.sha256(other).hexdigest(), "application/pdf"
        )


async def test_checksum_mismatch_leaves_nothing_behind(
    storage: LocalStorageService, tmp_path: Path
) -> None:
    with pytest.raises(StorageChecksumMismatchError):
        await storage.upload(io.BytesIO(DATA), REF, "0" * 64, "application/pdf")
    assert not (tmp_path / REF).exists()
    assert list((tmp_path / "documents" / "doc1").glob(".upload_*")) == []


async def test_download_missing_raises(storage: LocalStorageService) -> None:
    with pytest.raises(StorageNotFoundError):
        await _read_all(storage, "documents/missing.pdf")


async def test_path_traversal_rejected(storage: LocalStorageService) -> None:
    with pytest.raises(StoragePermissionError):
        await storage.upload(io.BytesIO(DATA), "../escape.txt", CHECKSUM, "text/plain")


async def test_delete_removes_file_and_empty_dirs(
    storage: LocalStorageService, tmp_path: Path
) -> None:
    await storage.upload(io.BytesIO(DATA), REF, CHECKSUM, "application/pdf")
    assert await storage.delete(REF) is True
    assert not (tmp_path / "documents").exists()
    assert await storage.delete(REF) is False


def test_public_url_with_base_url(tmp_path: Path) -> None:
    storage = LocalStorageService(str(tmp_path), base_url="https://files.test/")
    assert storage.get_public_url("documents/a b.pdf") == "https://files.test/documents/a%20b.pdf"


def test_public_url_without_base_url_is_file_uri(storage: LocalStorageService) -> None:
    url = storage.get_public_url(REF)
    assert url.startswith("file://")
    assert url.endswith("/documents/doc1/report.pdf")
