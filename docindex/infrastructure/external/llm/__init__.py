"""LLM inference clients. GeminiClient implements IInferenceClient."""

from docindex.infrastructure.external.llm.gemini_client import (
    GeminiClient,
    extract_generated_text,
)

__all__ = ["GeminiClient", "extract_generated_text"]
