"""Domain layer: taxonomy and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from docindex.domain.exceptions import (
    CategorizationError,
    DocIndexException,
    DuplicateDocumentException,
    EndpointError,
    FailureKind,
    MalformedResponseError,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TransportError,
    ValidationException,
)
from docindex.domain.taxonomy import (
    DEFAULT_CATEGORIZATION,
    CategorizationResult,
    Taxonomy,
    ValidationPolicy,
)

__all__ = [
    # Taxonomy
    "DEFAULT_CATEGORIZATION",
    "CategorizationResult",
    "Taxonomy",
    "ValidationPolicy",
    # Exceptions
    "CategorizationError",
    "DocIndexException",
    "DuplicateDocumentException",
    "EndpointError",
    "FailureKind",
    "MalformedResponseError",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "TransportError",
    "ValidationException",
]
