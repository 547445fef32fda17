"""Categorize a local file with the configured taxonomy and print the result as JSON.

Usage:
    python -m scripts.categorize_file <path> [mime_type]
Nothing is stored. Uses GEMINI_API_KEY / GEMINI_MODEL and the CATEGORIZATION_*
and TAXONOMY_* settings from the environment or .env.
"""

import asyncio
import json
import mimetypes
import sys
from pathlib import Path

from docindex.application.services.categorizer import Categorizer, CategorizerConfig
from docindex.core.config import get_settings
from docindex.domain.exceptions import ValidationException
from docindex.infrastructure.external.extraction import TextExtractor
from docindex.infrastructure.external.llm import GeminiClient
from docindex.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Extract text from the file, categorize it, print {topic, project, team}."""
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.categorize_file <path> [mime_type]", file=sys.stderr)
        sys.exit(1)
    path = Path(sys.argv[1])
    mime_type = sys.argv[2] if len(sys.argv) > 2 else (mimetypes.guess_type(path.name)[0] or "")

    settings = get_settings()
    setup_logging()
    if not settings.gemini_api_key.get_secret_value():
        print("GEMINI_API_KEY is not set; the fallback categorization will be returned", file=sys.stderr)

    try:
        text = TextExtractor().extract(path.read_bytes(), path.name, mime_type)
    except (OSError, ValidationException) as e:
        print(f"Cannot read {path}: {e}", file=sys.stderr)
        sys.exit(1)

    client = GeminiClient(
        api_key=settings.gemini_api_key.get_secret_value(),
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.llm_timeout_seconds,
    )
    try:
        result = await Categorizer(CategorizerConfig.from_settings(settings), client).categorize(text)
    finally:
        await client.aclose()
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
