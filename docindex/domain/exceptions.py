"""Domain errors.

DocIndexException and its request-level subclasses become HTTP error
responses (core.exception_handlers). CategorizationError subclasses
describe one failed inference attempt; the categorizer absorbs them and
they never reach a handler.
"""

from enum import Enum
from typing import Any


class DocIndexException(Exception):
    """Root of every error this service raises on purpose.

    ``error_code`` is the stable, machine-readable identifier clients see
    (and what the HTTP status is chosen from); ``details`` holds structured
    context such as the offending field or document id.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = dict(details) if details else {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error_code, "message": self.message, "details": self.details}


class ValidationException(DocIndexException):
    """Client input rejected (missing title, empty file, unreadable document...)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else None)


class ResourceNotFoundException(DocIndexException):
    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateDocumentException(DocIndexException):
    """Raised when a file with the same checksum is already indexed."""

    def __init__(self, checksum: str, existing_document_id: str | None = None) -> None:
        super().__init__(
            "A document with identical content is already indexed",
            "DUPLICATE_DOCUMENT",
            {"checksum": checksum, "document_id": existing_document_id},
        )


class SqlNotConfiguredException(DocIndexException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            "Document storage is unavailable: no SQL database is configured",
            "SERVICE_UNAVAILABLE",
        )


class FailureKind(str, Enum):
    """Classification of a failed inference attempt (drives retry decisions)."""

    TRANSPORT = "transport"
    ENDPOINT = "endpoint"
    MALFORMED = "malformed"


class CategorizationError(DocIndexException):
    """Base for failures of one inference attempt.

    Subclasses carry a FailureKind; the retry policy decides from the kind
    alone whether another attempt is made.
    """

    kind: FailureKind


class TransportError(CategorizationError):
    """Connection failure, timeout, or unreadable response envelope. Retryable."""

    kind = FailureKind.TRANSPORT

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Inference transport failed: {reason}",
            "INFERENCE_TRANSPORT_ERROR",
            {"reason": reason},
        )


class EndpointError(CategorizationError):
    """Inference endpoint answered with a non-success status. Not retried."""

    kind = FailureKind.ENDPOINT

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(
            f"Inference endpoint returned status {status_code}",
            "INFERENCE_ENDPOINT_ERROR",
            {"status_code": status_code},
        )


class MalformedResponseError(CategorizationError):
    """Generated text missing or not a valid categorization object. Not retried."""

    kind = FailureKind.MALFORMED

    def __init__(self, reason: str, generated_text: str | None = None) -> None:
        details: dict[str, Any] = {"reason": reason}
        if generated_text is not None:
            details["generated_text"] = generated_text
        super().__init__(
            f"Malformed inference response: {reason}",
            "INFERENCE_MALFORMED_RESPONSE",
            details,
        )
