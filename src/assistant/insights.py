"""One-shot assistant calls: ranked-search summary and document explanation."""

from __future__ import annotations

import logging

from src.assistant.gemini import TextCompleter
from src.assistant.prompts import explain_prompt, search_prompt
from src.library.models import Document, Language

logger = logging.getLogger(__name__)

EXPLAIN_FALLBACK = "Error."


def summarize_search(
    assistant: TextCompleter, query: str, documents: list[Document], language: Language
) -> str | None:
    """Two-line recommendation for the visible documents, or None if unavailable."""
    if not query:
        return None
    logger.info("AI search over %d document(s) for: %.80s", len(documents), query)
    return assistant.complete(search_prompt(query, documents, language)) or None


def explain_document(assistant: TextCompleter, doc: Document, language: Language) -> str:
    text = assistant.complete(
        explain_prompt(doc, language), temperature=0.7, max_output_tokens=200
    )
    return text or EXPLAIN_FALLBACK
