"""
Smoke-test for the Gemini collaborator against the live API.

NOT a pytest suite; needs GOOGLE_API_KEY in .env. Run directly:
    python scripts/smoke_assistant.py

Exercises the three call shapes on the seed catalog: search summary,
document explanation, recovery message, plus two chat turns.
"""

import logging
import sys
import time

# Ensure project root is in path when running as a script
sys.path.insert(0, ".")

from src.assistant.chat import CHAT_FALLBACK, AssistantChat  # noqa: E402
from src.assistant.gemini import GeminiClient  # noqa: E402
from src.assistant.insights import EXPLAIN_FALLBACK, explain_document, summarize_search  # noqa: E402
from src.config import settings  # noqa: E402
from src.library.recovery import recover_account  # noqa: E402
from src.library.seed import seed_documents, seed_users  # noqa: E402

logging.basicConfig(level=logging.WARNING)  # suppress noisy INFO during smoke run


def _divider(char: str = "─", width: int = 72) -> None:
    print(char * width)


def _timed(label: str, fn):
    start = time.time()
    result = fn()
    print(f"  {label} ({time.time() - start:.2f}s):")
    for line in str(result).splitlines():
        print(f"    {line}")
    print()
    return result


def main() -> None:
    if not settings.google_api_key:
        print("GOOGLE_API_KEY is not set, nothing to test.")
        sys.exit(1)

    _divider("═")
    print(f"  INDUSDOCS ASSISTANT SMOKE TEST: {settings.llm_model} / {settings.chat_model}")
    _divider("═")

    client = GeminiClient()
    docs = seed_documents()
    errors: list[str] = []

    summary = _timed("Search summary", lambda: summarize_search(client, "acetona", docs, "es"))
    if summary is None:
        errors.append("search summary returned None")

    explanation = _timed("Explanation", lambda: explain_document(client, docs[0], "fr"))
    if explanation == EXPLAIN_FALLBACK:
        errors.append("explanation fell back")

    recovery = _timed(
        "Recovery", lambda: recover_account(seed_users(), "juan@indudocs.com", client, "es")
    )
    if not recovery.generated:
        errors.append("recovery used the fixed template")

    chat = AssistantChat(client, docs, "es")
    for turn in ("¿Qué EPI necesito para manejar acetona?", "¿Y para soldar en TIG?"):
        reply = _timed(f"Chat: {turn}", lambda: chat.send(turn))
        if reply.text == CHAT_FALLBACK:
            errors.append(f"chat turn failed: {turn}")

    _divider("═")
    if errors:
        print(f"  RESULT: {len(errors)} failure(s):")
        for err in errors:
            print(f"    • {err}")
        sys.exit(1)
    print("  RESULT: All assistant calls completed. ✓")


if __name__ == "__main__":
    main()
