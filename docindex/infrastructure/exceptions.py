"""Errors raised by the storage backends and the text extractor.

Storage errors carry a STORAGE_* error_code (see core.exception_handlers
for the HTTP mapping). Extraction errors are ValidationExceptions: the
uploaded file, not the server, is at fault.
"""

from typing import Any

from docindex.domain.exceptions import DocIndexException, ValidationException


class StorageException(DocIndexException):
    """A storage backend could not complete an operation on ``storage_ref``."""

    code = "STORAGE_ERROR"
    summary = "Storage operation failed"

    def __init__(self, storage_ref: str, **context: Any) -> None:
        self.storage_ref = storage_ref
        super().__init__(
            f"{self.summary}: {storage_ref}",
            self.code,
            {"storage_ref": storage_ref, **context},
        )


class StorageNotFoundError(StorageException):
    code = "STORAGE_NOT_FOUND"
    summary = "No stored object"


class StorageUploadError(StorageException):
    code = "STORAGE_UPLOAD_ERROR"
    summary = "Could not store object"

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(storage_ref, reason=reason)


class StorageDownloadError(StorageException):
    code = "STORAGE_DOWNLOAD_ERROR"
    summary = "Could not read object"

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(storage_ref, reason=reason)


class StorageDeleteError(StorageException):
    code = "STORAGE_DELETE_ERROR"
    summary = "Could not delete object"

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(storage_ref, reason=reason)


class StorageChecksumMismatchError(StorageException):
    """Bytes received do not hash to the checksum computed at ingestion."""

    code = "STORAGE_CHECKSUM_ERROR"
    summary = "Checksum mismatch"

    def __init__(self, storage_ref: str, expected: str, actual: str) -> None:
        super().__init__(storage_ref, expected=expected, actual=actual)


class StorageAlreadyExistsError(StorageException):
    """A different object already lives under this reference."""

    code = "STORAGE_EXISTS_ERROR"
    summary = "Object already exists"


class StoragePermissionError(StorageException):
    """The reference resolves outside the storage root."""

    code = "STORAGE_PERMISSION_ERROR"
    summary = "Reference not allowed"

    def __init__(self, storage_ref: str, operation: str) -> None:
        super().__init__(storage_ref, operation=operation)


class UnsupportedDocumentTypeError(ValidationException):
    def __init__(self, filename: str, mime_type: str) -> None:
        super().__init__(
            f"No text extractor for {filename} ({mime_type or 'unknown type'})",
            field="file",
        )


class TextExtractionError(ValidationException):
    """The document is corrupt, encrypted or otherwise unreadable."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Could not extract text from {filename}: {reason}", field="file")
