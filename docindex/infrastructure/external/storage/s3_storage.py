"""S3-compatible document storage (AWS S3, MinIO, Spaces)."""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import AsyncIterator
from typing import Any, BinaryIO
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docindex.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageUploadError,
)

_MISSING_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_missing(err: ClientError) -> bool:
    return err.response.get("Error", {}).get("Code") in _MISSING_CODES


class S3StorageService:
    """Bucket-backed storage. boto3 is blocking, so calls run in a worker thread.

    The SHA-256 of each object is stored in its user metadata and used to make
    re-uploads of identical content a no-op.
    """

    CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        client_kwargs: dict[str, Any] = {"region_name": region}
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        if access_key and secret_key:
            client_kwargs["aws_access_key_id"] = access_key
            client_kwargs["aws_secret_access_key"] = secret_key
        self._s3 = boto3.client("s3", **client_kwargs)

    def _head(self, key: str) -> dict[str, Any] | None:
        try:
            return self._s3.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_missing(e):
                return None
            raise

    def _put(
        self,
        file_data: BinaryIO,
        key: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None,
    ) -> dict[str, Any]:
        head = self._head(key)
        if head is not None:
            stored = (head.get("Metadata") or {}).get("sha256")
            if stored != expected_checksum:
                raise StorageAlreadyExistsError(key)
            return {"storage_ref": key, "checksum": stored, "size": head["ContentLength"]}

        file_data.seek(0)
        body = file_data.read()
        actual = hashlib.sha256(body).hexdigest()
        if actual != expected_checksum:
            raise StorageChecksumMismatchError(key, expected_checksum, actual)
        user_meta = {name.lower().replace("_", "-"): value for name, value in (metadata or {}).items()}
        user_meta["sha256"] = actual
        self._s3.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            ServerSideEncryption="AES256",
            Metadata=user_meta,
        )
        return {"storage_ref": key, "checksum": actual, "size": len(body)}

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(
                self._put, file_data, storage_ref, expected_checksum, content_type, metadata
            )
        except (StorageChecksumMismatchError, StorageAlreadyExistsError):
            raise
        except (ClientError, BotoCoreError) as e:
            raise StorageUploadError(storage_ref, str(e)) from e

    def _open(self, key: str) -> Any:
        try:
            return self._s3.get_object(Bucket=self.bucket, Key=key)["Body"]
        except ClientError as e:
            if _is_missing(e):
                raise StorageNotFoundError(key) from e
            raise StorageDownloadError(key, str(e)) from e
        except BotoCoreError as e:
            raise StorageDownloadError(key, str(e)) from e

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream the object body; each blocking read runs in a worker thread."""
        body = await asyncio.to_thread(self._open, storage_ref)
        chunks = body.iter_chunks(self.CHUNK_SIZE)
        try:
            while chunk := await asyncio.to_thread(next, chunks, b""):
                yield chunk
        except BotoCoreError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e
        finally:
            body.close()

    def _remove(self, key: str) -> bool:
        if self._head(key) is None:
            return False
        self._s3.delete_object(Bucket=self.bucket, Key=key)
        return True

    async def delete(self, storage_ref: str) -> bool:
        try:
            return await asyncio.to_thread(self._remove, storage_ref)
        except (ClientError, BotoCoreError) as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

    def get_public_url(self, storage_ref: str) -> str:
        """CDN/base URL if configured, then path-style for custom endpoints, else virtual-hosted AWS."""
        key = quote(storage_ref)
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
