"""
Create / update / delete transforms for sites, users and documents.

Every function takes the current collection and returns a new list; records
are never mutated in place and no other collection is touched. The caller
(DocumentLibrary) persists the result.

  editing is None  → create: fresh id, append
  editing present  → update: merge the draft's set fields over the record
                     with the same id (no match → collection unchanged)
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel

from src.library.models import Document, DocumentDraft, Site, SiteDraft, User, UserDraft

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Site, User, Document)

SITE_PREFIX = "c"
USER_PREFIX = "u"
DOCUMENT_PREFIX = "d"


def new_id(prefix: str) -> str:
    return f"{prefix}{uuid4().hex[:12]}"


def _draft_fields(draft: BaseModel, nullable: frozenset[str] = frozenset()) -> dict[str, Any]:
    """Fields explicitly set on the draft; None only survives for optional record fields."""
    return {
        key: value
        for key, value in draft.model_dump(exclude_unset=True).items()
        if value is not None or key in nullable
    }


def _merge(collection: list[RecordT], editing_id: str, fields: dict[str, Any]) -> list[RecordT]:
    if not any(record.id == editing_id for record in collection):
        logger.warning("Update skipped, no record with id '%s'.", editing_id)
    return [
        record.model_copy(update=fields) if record.id == editing_id else record
        for record in collection
    ]


def _delete(collection: list[RecordT], record_id: str) -> list[RecordT]:
    return [record for record in collection if record.id != record_id]


# ---------------------------------------------------------------------------
# Sites
# ---------------------------------------------------------------------------


def save_site(sites: list[Site], draft: SiteDraft, editing: Site | None = None) -> list[Site]:
    fields = _draft_fields(draft, nullable=frozenset({"location"}))
    if editing is not None:
        return _merge(sites, editing.id, fields)
    site = Site.model_validate({**fields, "id": new_id(SITE_PREFIX)})
    logger.info("Created site '%s' (%s).", site.name, site.id)
    return [*sites, site]


def delete_site(sites: list[Site], site_id: str) -> list[Site]:
    return _delete(sites, site_id)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def save_user(users: list[User], draft: UserDraft, editing: User | None = None) -> list[User]:
    fields = _draft_fields(draft, nullable=frozenset({"site_affinity"}))
    if editing is not None:
        # A blank password on the edit form keeps the current one
        if not fields.get("password"):
            fields.pop("password", None)
        return _merge(users, editing.id, fields)
    user = User.model_validate({**fields, "id": new_id(USER_PREFIX)})
    logger.info("Created user '%s' (%s, %s).", user.email, user.role, user.id)
    return [*users, user]


def delete_user(users: list[User], user_id: str) -> list[User]:
    return _delete(users, user_id)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def save_document(
    documents: list[Document],
    draft: DocumentDraft,
    editing: Document | None = None,
    today: date | None = None,
) -> list[Document]:
    """Create or update a document; both paths stamp last_updated with today's date."""
    fields = _draft_fields(draft)
    fields["last_updated"] = today or date.today()
    if editing is not None:
        return _merge(documents, editing.id, fields)
    doc = Document.model_validate({**fields, "id": new_id(DOCUMENT_PREFIX)})
    logger.info("Created document '%s' (%s) for site %s.", doc.title, doc.id, doc.site_id)
    return [*documents, doc]


def delete_document(documents: list[Document], document_id: str) -> list[Document]:
    return _delete(documents, document_id)
