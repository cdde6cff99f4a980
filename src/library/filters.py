"""
Access-scoped document filtering.

The visible set is a pure function of the document list, the actor and the
current filter selection. Order of the source list is preserved.
"""

from __future__ import annotations

from pydantic import BaseModel

from src.library.models import ALL, Document, DocType, User


class DocumentFilter(BaseModel):
    """Current browser selection. "ALL" is the wildcard for type and site."""

    query: str = ""
    doc_type: DocType | str = ALL
    site_id: str = ALL


def _matches_query(doc: Document, query: str) -> bool:
    # No trimming: a whitespace-only query is a literal substring filter
    needle = query.lower()
    return needle in doc.title.lower() or needle in doc.description.lower()


def filter_documents(
    documents: list[Document],
    actor: User | None,
    query: str = "",
    doc_type: str = ALL,
    site_id: str = ALL,
) -> list[Document]:
    """
    Return the documents the actor may see under the given selection.

    OPERARIO actors are pinned to their site_affinity and the site filter is
    ignored. ADMIN actors see every site unless site_id narrows it. Without an
    actor nothing is visible.
    """
    if actor is None:
        return []

    visible: list[Document] = []
    for doc in documents:
        if actor.role == "OPERARIO":
            if doc.site_id != actor.site_affinity:
                continue
        elif site_id != ALL and doc.site_id != site_id:
            continue

        if not _matches_query(doc, query):
            continue
        if doc_type != ALL and doc.doc_type != doc_type:
            continue
        visible.append(doc)
    return visible


def apply_filter(documents: list[Document], actor: User | None, selection: DocumentFilter) -> list[Document]:
    return filter_documents(
        documents,
        actor,
        query=selection.query,
        doc_type=selection.doc_type,
        site_id=selection.site_id,
    )
