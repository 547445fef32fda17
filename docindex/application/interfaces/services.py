"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from docindex.domain.taxonomy import CategorizationResult


# Inference client interface
class IInferenceClient(Protocol):
    """Protocol for the LLM inference endpoint used by the categorizer."""

    async def generate(self, payload: dict[str, Any]) -> str:
        """Send one request and return the model's generated text.

        Raises TransportError (retryable), EndpointError (non-success status)
        or MalformedResponseError (no generated text in the envelope).
        """


# Categorizer interface
class ICategorizer(Protocol):
    """Protocol for document categorization (best-effort; never raises)."""

    async def categorize(self, content: str) -> CategorizationResult:
        """Return the categorization for content, or the fallback result."""


# Text extraction interface
class ITextExtractor(Protocol):
    """Protocol for extracting plain text from an uploaded file."""

    def extract(self, data: bytes, filename: str, mime_type: str) -> str:
        """Return extracted text. Raises ValidationException for unsupported or unreadable files."""
