"""Builds the configured storage backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docindex.core.config import Settings, get_settings

if TYPE_CHECKING:
    from docindex.application.interfaces.storage import IStorageService


class StorageFactory:
    @staticmethod
    def create_storage_service(settings: Settings | None = None) -> IStorageService:
        """Return a LocalStorageService or S3StorageService for STORAGE_BACKEND.

        Backends are imported on demand so boto3 is only needed for ``s3``.
        Raises ValueError for an unknown backend or incomplete configuration.
        """
        cfg = settings or get_settings()
        backend = cfg.storage_backend.lower()

        if backend == "local":
            if not cfg.storage_root:
                raise ValueError("STORAGE_ROOT must be set for the local storage backend")
            from docindex.infrastructure.external.storage.local_storage import (
                LocalStorageService,
            )

            return LocalStorageService(cfg.storage_root, base_url=cfg.storage_base_url)

        if backend == "s3":
            if not cfg.s3_bucket:
                raise ValueError("S3_BUCKET must be set for the s3 storage backend")
            try:
                from docindex.infrastructure.external.storage.s3_storage import (
                    S3StorageService,
                )
            except ImportError as e:
                raise ValueError(
                    "The s3 storage backend needs boto3: pip install 'docindex[storage]'"
                ) from e
            secret = cfg.s3_secret_key.get_secret_value() if cfg.s3_secret_key else None
            return S3StorageService(
                bucket=cfg.s3_bucket,
                region=cfg.s3_region,
                endpoint_url=cfg.s3_endpoint_url,
                access_key=cfg.s3_access_key,
                secret_key=secret,
                public_base_url=cfg.storage_base_url,
            )

        raise ValueError(f"Unsupported STORAGE_BACKEND {backend!r}; expected 'local' or 's3'")
