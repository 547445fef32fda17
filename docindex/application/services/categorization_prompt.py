"""Prompt and request-body construction for document categorization.

Everything here is a pure function of the taxonomy and the (already
truncated) snippet, so the same payload can be sent on every attempt.
"""

from __future__ import annotations

from typing import Any

from docindex.domain.taxonomy import Taxonomy

CATEGORY_FIELDS: tuple[str, ...] = ("topic", "project", "team")


def _join(values: tuple[str, ...]) -> str:
    return ", ".join(values)


def build_system_prompt(taxonomy: Taxonomy) -> str:
    """System instruction listing every allowed value, in taxonomy order."""
    return (
        "You are an expert document categorizer for a marketing firm. "
        "Analyze the provided document text and assign it a single 'topic', "
        "'project' name, and 'team'.\n"
        "\n"
        "You MUST select values ONLY from these predetermined lists:\n"
        f"- Topic: {_join(taxonomy.topics)}. "
        f"If none apply, use '{taxonomy.topic_fallback}'.\n"
        f"- Project: {_join(taxonomy.projects)}. "
        f"If none apply, use '{taxonomy.project_fallback}'.\n"
        f"- Team: {_join(taxonomy.teams)}.\n"
        "\n"
        "Always respond with the requested JSON structure only."
    )


def build_user_message(snippet: str) -> str:
    return (
        "Categorize the following document text. "
        "Be creative if the project or team is implied: \n\n"
        "--- DOCUMENT TEXT SNIPPET ---\n\n"
        f"{snippet}"
    )


def build_response_schema(taxonomy: Taxonomy) -> dict[str, Any]:
    """Response schema with three required strings.

    Descriptions restate the allowed values for the model; the client does
    not validate against them.
    """
    return {
        "type": "OBJECT",
        "properties": {
            "topic": {
                "type": "STRING",
                "description": f"The main subject. Must be one of: {_join(taxonomy.topics)}",
            },
            "project": {
                "type": "STRING",
                "description": (
                    f"The specific project. Must be one of: {_join(taxonomy.projects)}"
                ),
            },
            "team": {
                "type": "STRING",
                "description": f"The primary team. Must be one of: {_join(taxonomy.teams)}",
            },
        },
        "required": list(CATEGORY_FIELDS),
    }


def build_payload(taxonomy: Taxonomy, snippet: str) -> dict[str, Any]:
    """Full generateContent request body for one categorization call."""
    return {
        "contents": [{"parts": [{"text": build_user_message(snippet)}]}],
        "systemInstruction": {"parts": [{"text": build_system_prompt(taxonomy)}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": build_response_schema(taxonomy),
        },
    }
