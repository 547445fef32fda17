"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from docindex.infrastructure or docindex.api.
"""

from docindex.application.interfaces.repositories import (
    IDocumentRepository,
    ISearchRepository,
)
from docindex.application.interfaces.services import (
    ICategorizer,
    IInferenceClient,
    ITextExtractor,
)
from docindex.application.interfaces.storage import IStorageService

__all__ = [
    "ICategorizer",
    "IDocumentRepository",
    "IInferenceClient",
    "ISearchRepository",
    "IStorageService",
    "ITextExtractor",
]
