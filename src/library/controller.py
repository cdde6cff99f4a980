"""
DocumentLibrary: single owner of the application state.

Holds the five state slices in an AppState, runs the pure filter / mutator
functions over them, and persists exactly the slice that changed after each
accepted transition. Both the FastAPI app and the Streamlit UI drive the
library through this class only.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TypeVar

from pydantic import BaseModel

from src.assistant.chat import AssistantChat
from src.assistant.gemini import TextCompleter
from src.assistant.insights import explain_document, summarize_search
from src.config import settings
from src.library import mutators, seed
from src.library.errors import PermissionDeniedError, RecordNotFoundError
from src.library.filters import DocumentFilter, apply_filter
from src.library.models import (
    LANGUAGES,
    Document,
    DocumentDraft,
    Language,
    Session,
    Site,
    SiteDraft,
    User,
    UserDraft,
)
from src.library.recovery import RecoveryResult, recover_account
from src.library.session import login, logout
from src.library.store import (
    DOCUMENTS_ADAPTER,
    DOCUMENTS_KEY,
    SESSION_ADAPTER,
    SESSION_KEY,
    SITES_ADAPTER,
    SITES_KEY,
    USERS_ADAPTER,
    USERS_KEY,
    JsonStore,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Site, User, Document)

NO_SITE_LABEL = "No site"
GLOBAL_SITE_LABEL = "Global"


class AppState(BaseModel):
    sites: list[Site]
    users: list[User]
    documents: list[Document]
    session: Session
    language: Language


def _find(collection: list[RecordT], record_id: str, kind: str) -> RecordT:
    for record in collection:
        if record.id == record_id:
            return record
    raise RecordNotFoundError(kind, record_id)


class DocumentLibrary:
    def __init__(self, store: JsonStore, assistant: TextCompleter | None = None) -> None:
        self._store = store
        self._assistant = assistant
        self._chat: AssistantChat | None = None
        self._chat_documents: list[Document] = []
        self.state = self._load()
        logger.info(
            "Library loaded: %d site(s), %d user(s), %d document(s), language=%s.",
            len(self.state.sites),
            len(self.state.users),
            len(self.state.documents),
            self.state.language,
        )

    def _load(self) -> AppState:
        default_language = (
            settings.default_language if settings.default_language in LANGUAGES else "es"
        )
        return AppState(
            sites=self._store.load(SITES_KEY, SITES_ADAPTER, seed.seed_sites),
            users=self._store.load(USERS_KEY, USERS_ADAPTER, seed.seed_users),
            documents=self._store.load(DOCUMENTS_KEY, DOCUMENTS_ADAPTER, seed.seed_documents),
            session=self._store.load(SESSION_KEY, SESSION_ADAPTER, seed.seed_session),
            language=self._store.load_language(default_language),
        )

    @property
    def assistant(self) -> TextCompleter:
        if self._assistant is None:
            from src.assistant.gemini import GeminiClient

            self._assistant = GeminiClient()
        return self._assistant

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def actor(self) -> User | None:
        return self.state.session.actor

    def require_admin(self) -> User:
        actor = self.actor
        if actor is None or not actor.is_admin:
            raise PermissionDeniedError("Administrator access required")
        return actor

    def login(self, email: str, password: str) -> User:
        self.state.session = login(self.state.users, email, password)
        self._chat = None
        self._store.save(SESSION_KEY, SESSION_ADAPTER, self.state.session)
        return self.state.session.user

    def logout(self) -> None:
        self.state.session = logout()
        self._chat = None
        self._store.save(SESSION_KEY, SESSION_ADAPTER, self.state.session)
        logger.info("Logged out.")

    def set_language(self, language: Language) -> None:
        self.state.language = language
        self._store.save_language(language)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def visible_documents(self, selection: DocumentFilter | None = None) -> list[Document]:
        return apply_filter(self.state.documents, self.actor, selection or DocumentFilter())

    def get_document(self, document_id: str) -> Document:
        doc = _find(self.state.documents, document_id, "document")
        if doc not in self.visible_documents():
            raise RecordNotFoundError("document", document_id)
        return doc

    def site_name(self, site_id: str | None, placeholder: str = NO_SITE_LABEL) -> str:
        """Display name for a site id; dangling or missing ids get the placeholder."""
        if site_id is None:
            return placeholder
        site = next((s for s in self.state.sites if s.id == site_id), None)
        return site.name if site else placeholder

    # ------------------------------------------------------------------
    # Sites
    # ------------------------------------------------------------------

    def save_site(self, draft: SiteDraft, editing_id: str | None = None) -> Site:
        self.require_admin()
        editing = _find(self.state.sites, editing_id, "site") if editing_id else None
        self.state.sites = mutators.save_site(self.state.sites, draft, editing)
        self._store.save(SITES_KEY, SITES_ADAPTER, self.state.sites)
        return _find(self.state.sites, editing_id, "site") if editing else self.state.sites[-1]

    def delete_site(self, site_id: str) -> None:
        self.require_admin()
        dangling_docs = sum(1 for d in self.state.documents if d.site_id == site_id)
        dangling_users = sum(1 for u in self.state.users if u.site_affinity == site_id)
        if dangling_docs or dangling_users:
            logger.warning(
                "Deleting site %s leaves %d document(s) and %d user(s) without a site.",
                site_id,
                dangling_docs,
                dangling_users,
            )
        self.state.sites = mutators.delete_site(self.state.sites, site_id)
        self._store.save(SITES_KEY, SITES_ADAPTER, self.state.sites)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def save_user(self, draft: UserDraft, editing_id: str | None = None) -> User:
        self.require_admin()
        editing = _find(self.state.users, editing_id, "user") if editing_id else None
        self.state.users = mutators.save_user(self.state.users, draft, editing)
        self._store.save(USERS_KEY, USERS_ADAPTER, self.state.users)
        return _find(self.state.users, editing_id, "user") if editing else self.state.users[-1]

    def delete_user(self, user_id: str) -> None:
        self.require_admin()
        self.state.users = mutators.delete_user(self.state.users, user_id)
        self._store.save(USERS_KEY, USERS_ADAPTER, self.state.users)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def save_document(
        self, draft: DocumentDraft, editing_id: str | None = None, today: date | None = None
    ) -> Document:
        self.require_admin()
        editing = _find(self.state.documents, editing_id, "document") if editing_id else None
        self.state.documents = mutators.save_document(self.state.documents, draft, editing, today)
        self._store.save(DOCUMENTS_KEY, DOCUMENTS_ADAPTER, self.state.documents)
        if editing:
            return _find(self.state.documents, editing_id, "document")
        return self.state.documents[-1]

    def delete_document(self, document_id: str) -> None:
        self.require_admin()
        self.state.documents = mutators.delete_document(self.state.documents, document_id)
        self._store.save(DOCUMENTS_KEY, DOCUMENTS_ADAPTER, self.state.documents)

    # ------------------------------------------------------------------
    # Assistant
    # ------------------------------------------------------------------

    def ai_search(self, selection: DocumentFilter) -> str | None:
        visible = self.visible_documents(selection)
        return summarize_search(self.assistant, selection.query, visible, self.state.language)

    def explain_document(self, document_id: str) -> str:
        return explain_document(
            self.assistant, self.get_document(document_id), self.state.language
        )

    def recover_password(self, email: str) -> RecoveryResult:
        return recover_account(self.state.users, email, self.assistant, self.state.language)

    def chat(self, selection: DocumentFilter | None = None) -> AssistantChat:
        """Current chat session, rebuilt when the visible catalog or the language changed."""
        visible = self.visible_documents(selection)
        if self._chat is None:
            self._chat = AssistantChat(self.assistant, visible, self.state.language)
        elif visible != self._chat_documents or self._chat.language != self.state.language:
            self._chat.reset(visible, self.state.language)
        self._chat_documents = visible
        return self._chat


def create_library(assistant: TextCompleter | None = None) -> DocumentLibrary:
    store = JsonStore(settings.store_dir, reset_corrupt=settings.reset_corrupt_store)
    return DocumentLibrary(store, assistant=assistant)
