"""Storage port used by document use cases (local and S3 backends satisfy it)."""

from collections.abc import AsyncIterator
from typing import Any, BinaryIO, Protocol


class IStorageService(Protocol):
    """Object storage collaborator: store bytes under a reference, expose a URL."""

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload file with checksum verification. Raises StorageUploadError on failure."""
        ...

    def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        ...

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""
        ...

    def get_public_url(self, storage_ref: str) -> str:
        """Return the stable URL recorded with the document."""
        ...
