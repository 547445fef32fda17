"""Application services: categorization, its prompt builder and retry policy."""

from docindex.application.services.categorizer import (
    Categorizer,
    CategorizerConfig,
    parse_generated_text,
)
from docindex.application.services.retry_policy import RetryDecision, RetryPolicy

__all__ = [
    "Categorizer",
    "CategorizerConfig",
    "RetryDecision",
    "RetryPolicy",
    "parse_generated_text",
]
