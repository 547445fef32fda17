"""Document storage backends (local filesystem, S3-compatible).

Use StorageFactory.create_storage_service(); the s3 backend needs the
``storage`` extra (boto3).
"""

from docindex.infrastructure.external.storage.factory import StorageFactory

__all__ = ["StorageFactory"]
