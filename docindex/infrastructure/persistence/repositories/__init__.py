from docindex.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from docindex.infrastructure.persistence.repositories.search_repo import (
    SearchRepository,
)

__all__ = ["DocumentRepository", "SearchRepository"]
