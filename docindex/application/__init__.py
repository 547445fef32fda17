"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, storage, inference, extraction).
"""

from docindex.application.interfaces import (
    ICategorizer,
    IDocumentRepository,
    IInferenceClient,
    ISearchRepository,
    IStorageService,
    ITextExtractor,
)
from docindex.application.services import Categorizer, CategorizerConfig, RetryPolicy
from docindex.application.use_cases import (
    DocumentIngestionService,
    DocumentQueryService,
    SearchService,
)

__all__ = [
    "Categorizer",
    "CategorizerConfig",
    "DocumentIngestionService",
    "DocumentQueryService",
    "ICategorizer",
    "IDocumentRepository",
    "IInferenceClient",
    "ISearchRepository",
    "IStorageService",
    "ITextExtractor",
    "RetryPolicy",
    "SearchService",
]
