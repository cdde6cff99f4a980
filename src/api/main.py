"""FastAPI application: REST surface over the DocumentLibrary for alternative front ends."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from src.assistant.chat import ChatMessage
from src.config import settings
from src.library.controller import DocumentLibrary, create_library
from src.library.errors import (
    AccountNotFoundError,
    InvalidCredentialsError,
    LibraryError,
    PermissionDeniedError,
    RecordNotFoundError,
    StoreCorruptedError,
)
from src.library.filters import DocumentFilter
from src.library.models import (
    ALL,
    Document,
    DocumentDraft,
    Language,
    Role,
    Site,
    SiteDraft,
    User,
    UserDraft,
)
from src.library.recovery import RecoveryResult

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="IndusDocs Site Document Library API", version="0.3.0")

# ---------------------------------------------------------------------------
# CORS: Streamlit dev server (8501) and local front ends
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8501", "http://localhost:3000", "http://localhost"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Library dependency: one library per process (single-tenant)
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_library() -> DocumentLibrary:
    return create_library()


# ---------------------------------------------------------------------------
# Domain error → HTTP status
# ---------------------------------------------------------------------------

_STATUS_CODES: dict[type[LibraryError], int] = {
    InvalidCredentialsError: 401,
    PermissionDeniedError: 403,
    AccountNotFoundError: 404,
    RecordNotFoundError: 404,
    StoreCorruptedError: 500,
}


@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError) -> JSONResponse:
    status_code = next(
        (code for kind, code in _STATUS_CODES.items() if isinstance(exc, kind)), 400
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def draft_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    # Drafts missing required fields on create
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str
    password: str


class LanguageRequest(BaseModel):
    language: Language


class RecoveryRequest(BaseModel):
    email: str


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    reply: ChatMessage | None
    messages: list[ChatMessage]


class TextResponse(BaseModel):
    text: str | None


class PublicUser(BaseModel):
    """User as returned by the API; the stored password never leaves the library."""

    id: str
    name: str
    email: str
    role: Role
    site_affinity: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls.model_validate(user.model_dump(exclude={"password"}))


class PublicSession(BaseModel):
    user: PublicUser | None = None
    is_authenticated: bool = False


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@app.get("/health")
async def health_check() -> dict:
    return {"status": "ok", "message": "IndusDocs library online."}


@app.post("/api/login", response_model=PublicUser)
async def login(
    req: LoginRequest, library: DocumentLibrary = Depends(get_library)
) -> PublicUser:
    return PublicUser.from_user(library.login(req.email, req.password))


@app.post("/api/logout", status_code=204)
async def logout(library: DocumentLibrary = Depends(get_library)) -> None:
    library.logout()


@app.get("/api/session", response_model=PublicSession)
async def current_session(library: DocumentLibrary = Depends(get_library)) -> PublicSession:
    session = library.state.session
    user = PublicUser.from_user(session.user) if session.user else None
    return PublicSession(user=user, is_authenticated=session.is_authenticated)


@app.get("/api/language")
async def get_language(library: DocumentLibrary = Depends(get_library)) -> dict:
    return {"language": library.state.language}


@app.put("/api/language")
async def set_language(
    req: LanguageRequest, library: DocumentLibrary = Depends(get_library)
) -> dict:
    library.set_language(req.language)
    return {"language": library.state.language}


@app.post("/api/recover", response_model=RecoveryResult)
async def recover(
    req: RecoveryRequest, library: DocumentLibrary = Depends(get_library)
) -> RecoveryResult:
    return library.recover_password(req.email)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@app.get("/api/documents", response_model=list[Document])
async def list_documents(
    query: str = Query("", description="Case-insensitive substring of title or description"),
    doc_type: str = Query(ALL, alias="type"),
    site_id: str = Query(ALL, alias="site", description="Only honoured for administrators"),
    library: DocumentLibrary = Depends(get_library),
) -> list[Document]:
    return library.visible_documents(
        DocumentFilter(query=query, doc_type=doc_type, site_id=site_id)
    )


@app.post("/api/documents", response_model=Document, status_code=201)
async def create_document(
    draft: DocumentDraft, library: DocumentLibrary = Depends(get_library)
) -> Document:
    return library.save_document(draft)


@app.put("/api/documents/{document_id}", response_model=Document)
async def update_document(
    document_id: str, draft: DocumentDraft, library: DocumentLibrary = Depends(get_library)
) -> Document:
    return library.save_document(draft, editing_id=document_id)


@app.delete("/api/documents/{document_id}", status_code=204)
async def delete_document(
    document_id: str, library: DocumentLibrary = Depends(get_library)
) -> None:
    library.delete_document(document_id)


@app.post("/api/documents/{document_id}/explain", response_model=TextResponse)
async def explain_document(
    document_id: str, library: DocumentLibrary = Depends(get_library)
) -> TextResponse:
    return TextResponse(text=library.explain_document(document_id))


@app.post("/api/search/ai", response_model=TextResponse)
async def ai_search(
    selection: DocumentFilter, library: DocumentLibrary = Depends(get_library)
) -> TextResponse:
    return TextResponse(text=library.ai_search(selection))


# ---------------------------------------------------------------------------
# Sites & users (administrators)
# ---------------------------------------------------------------------------


@app.get("/api/sites", response_model=list[Site])
async def list_sites(library: DocumentLibrary = Depends(get_library)) -> list[Site]:
    return library.state.sites


@app.post("/api/sites", response_model=Site, status_code=201)
async def create_site(draft: SiteDraft, library: DocumentLibrary = Depends(get_library)) -> Site:
    return library.save_site(draft)


@app.put("/api/sites/{site_id}", response_model=Site)
async def update_site(
    site_id: str, draft: SiteDraft, library: DocumentLibrary = Depends(get_library)
) -> Site:
    return library.save_site(draft, editing_id=site_id)


@app.delete("/api/sites/{site_id}", status_code=204)
async def delete_site(site_id: str, library: DocumentLibrary = Depends(get_library)) -> None:
    library.delete_site(site_id)


@app.get("/api/users", response_model=list[PublicUser])
async def list_users(library: DocumentLibrary = Depends(get_library)) -> list[PublicUser]:
    library.require_admin()
    return [PublicUser.from_user(user) for user in library.state.users]


@app.post("/api/users", response_model=PublicUser, status_code=201)
async def create_user(
    draft: UserDraft, library: DocumentLibrary = Depends(get_library)
) -> PublicUser:
    return PublicUser.from_user(library.save_user(draft))


@app.put("/api/users/{user_id}", response_model=PublicUser)
async def update_user(
    user_id: str, draft: UserDraft, library: DocumentLibrary = Depends(get_library)
) -> PublicUser:
    return PublicUser.from_user(library.save_user(draft, editing_id=user_id))


@app.delete("/api/users/{user_id}", status_code=204)
async def delete_user(user_id: str, library: DocumentLibrary = Depends(get_library)) -> None:
    library.delete_user(user_id)


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


@app.post("/api/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, library: DocumentLibrary = Depends(get_library)) -> ChatResponse:
    session = library.chat()
    reply = session.send(req.message)
    return ChatResponse(reply=reply, messages=session.messages)
