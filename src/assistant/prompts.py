"""
Prompt builders for the three one-shot calls and the chat system instruction.

The assistant's behavioural rules (answer language, cite official documents,
defer to the site supervisor) are data handed to the model, not logic enforced
here.
"""

from __future__ import annotations

from typing import assert_never

from src.library.models import Document, Language, User, doc_type_label


def language_name(language: Language) -> str:
    match language:
        case "es":
            return "Spanish (Castellano)"
        case "fr":
            return "French"
        case "ar":
            return "Moroccan Arabic (Darija)"
        case "wo":
            return "Wolof"
        case _:
            assert_never(language)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_SEARCH_TEMPLATE = """\
A worker is searching the IndusDocs library for: "{query}".

Available documents:
{catalog}

Which documents are the most relevant? Answer in {language} with a brief
two-line recommendation that highlights the most critical one.
"""

_EXPLAIN_TEMPLATE = """\
Briefly explain why this industrial document matters: "{title}" of type "{doc_type}".
Context: {description}

Answer in {language}, professionally and concisely, for a factory operator.
"""

_RECOVERY_TEMPLATE = """\
Write the body of a professional e-mail from IndusDocs to an employee named
{name} ({email}) who asked to recover their IndusDocs Doc Manager password.

Answer in {language}. The tone must be corporate, secure and reassuring.
State that a temporary link has been sent. Reply with the message body only.
"""

_CHAT_SYSTEM_INSTRUCTION = """\
You are "IndusBot", the virtual assistant of the IndusDocs document manager.
Your goal is to help site staff:
1. Carry out cleaning and maintenance work following the official instructions.
2. Operate industrial machinery safely.
3. Look up safety data sheets for chemical products.

KNOWLEDGE BASE:
{catalog}

GOLDEN RULES:
- Always answer in the requested language: {language}.
- Be extremely concise and put physical safety first.
- If the user asks about something that is not in the documents, tell them
  clearly to check with their site supervisor.
- Always name the official document when giving an instruction.
"""

RECOVERY_FALLBACK = (
    "Dear {name}, a recovery link has been sent to your corporate e-mail {email}."
)


def _catalog_line(doc: Document) -> str:
    return f"- [{doc_type_label(doc.doc_type)}] {doc.title}: {doc.description}"


def format_catalog(documents: list[Document]) -> str:
    if not documents:
        return "(no documents available)"
    return "\n".join(_catalog_line(doc) for doc in documents)


def search_prompt(query: str, documents: list[Document], language: Language) -> str:
    return _SEARCH_TEMPLATE.format(
        query=query, catalog=format_catalog(documents), language=language_name(language)
    )


def explain_prompt(doc: Document, language: Language) -> str:
    return _EXPLAIN_TEMPLATE.format(
        title=doc.title,
        doc_type=doc_type_label(doc.doc_type),
        description=doc.description,
        language=language_name(language),
    )


def recovery_prompt(user: User, language: Language) -> str:
    return _RECOVERY_TEMPLATE.format(
        name=user.name, email=user.email, language=language_name(language)
    )


def chat_system_instruction(documents: list[Document], language: Language) -> str:
    return _CHAT_SYSTEM_INSTRUCTION.format(
        catalog=format_catalog(documents), language=language_name(language)
    )
