"""Filesystem-backed document storage."""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, BinaryIO
from urllib.parse import quote

import aiofiles
import aiofiles.os

from docindex.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from docindex.shared.utils.datetime import utc_now

SIDECAR_SUFFIX = ".meta.json"


def _sidecar_for(path: Path) -> Path:
    return path.with_name(path.name + SIDECAR_SUFFIX)


async def _sha256_of(path: Path, chunk_size: int) -> str:
    digest = hashlib.sha256()
    async with aiofiles.open(path, "rb") as f:
        while block := await f.read(chunk_size):
            digest.update(block)
    return digest.hexdigest()


class LocalStorageService:
    """Stores uploaded documents under a directory tree.

    Every storage_ref must resolve inside ``storage_root``. An object is first
    written to a hidden temp file next to its target, verified against the
    caller's SHA-256, then moved into place; a JSON sidecar records what was
    stored. URLs are ``base_url/<ref>`` when the root is served by a static
    host and ``file://`` URIs otherwise.
    """

    CHUNK_SIZE = 64 * 1024

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _resolve(self, storage_ref: str) -> Path:
        candidate = (self.storage_root / storage_ref).resolve()
        if not candidate.is_relative_to(self.storage_root):
            raise StoragePermissionError(storage_ref, "path_validation")
        return candidate

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Write the object once; re-uploading identical bytes is a no-op."""
        target = self._resolve(storage_ref)
        try:
            if target.exists():
                return await self._existing(target, storage_ref, expected_checksum)
            payload = file_data.read()
            actual = hashlib.sha256(payload).hexdigest()
            if actual != expected_checksum:
                raise StorageChecksumMismatchError(storage_ref, expected_checksum, actual)

            target.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            fd, scratch = tempfile.mkstemp(dir=target.parent, prefix=".upload_")
            os.close(fd)
            try:
                async with aiofiles.open(scratch, "wb") as f:
                    await f.write(payload)
                os.replace(scratch, target)
            finally:
                if os.path.exists(scratch):
                    os.unlink(scratch)

            record = {
                "storage_ref": storage_ref,
                "checksum": actual,
                "size": len(payload),
                "content_type": content_type,
                "uploaded_at": utc_now().isoformat(),
                "custom": metadata or {},
            }
            async with aiofiles.open(_sidecar_for(target), "w") as f:
                await f.write(json.dumps(record, indent=2))
            return {k: record[k] for k in ("storage_ref", "checksum", "size", "uploaded_at")}
        except (StorageChecksumMismatchError, StorageAlreadyExistsError):
            raise
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e

    async def _existing(self, target: Path, storage_ref: str, expected: str) -> dict[str, Any]:
        stored = await _sha256_of(target, self.CHUNK_SIZE)
        if stored != expected:
            raise StorageAlreadyExistsError(storage_ref)
        sidecar = _sidecar_for(target)
        recorded: dict[str, Any] = {}
        if sidecar.exists():
            async with aiofiles.open(sidecar) as f:
                recorded = json.loads(await f.read())
        uploaded_at = recorded.get("uploaded_at") or utc_now().isoformat()
        return {
            "storage_ref": storage_ref,
            "checksum": stored,
            "size": target.stat().st_size,
            "uploaded_at": uploaded_at,
        }

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        path = self._resolve(storage_ref)
        if not path.is_file():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(path, "rb") as f:
                while block := await f.read(self.CHUNK_SIZE):
                    yield block
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Remove the object and its sidecar, pruning emptied directories."""
        path = self._resolve(storage_ref)
        if not path.exists():
            return False
        try:
            await aiofiles.os.remove(path)
            sidecar = _sidecar_for(path)
            if sidecar.exists():
                await aiofiles.os.remove(sidecar)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        directory = path.parent
        while directory != self.storage_root and not any(directory.iterdir()):
            directory.rmdir()
            directory = directory.parent
        return True

    def get_public_url(self, storage_ref: str) -> str:
        path = self._resolve(storage_ref)
        if self.base_url:
            return f"{self.base_url}/{quote(storage_ref)}"
        return path.as_uri()
