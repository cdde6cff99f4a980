"""
Pydantic records for the site document library.

Site, User, Document and Session are plain data: every behaviour lives in the
pure functions of src/library/filters.py and src/library/mutators.py. The
*Draft models carry partial field sets for the CRUD forms; only fields that
were explicitly set take part in a merge (model_dump(exclude_unset=True)).
"""

from __future__ import annotations

from datetime import date
from typing import Literal, assert_never

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Closed tag sets
# ---------------------------------------------------------------------------

Role = Literal["ADMIN", "OPERARIO"]
DocType = Literal["WORK_INSTRUCTION", "SAFETY_SHEET", "TECH_SHEET", "MACHINE_MANUAL"]
Language = Literal["es", "fr", "ar", "wo"]

DOC_TYPES: tuple[DocType, ...] = (
    "WORK_INSTRUCTION",
    "SAFETY_SHEET",
    "TECH_SHEET",
    "MACHINE_MANUAL",
)
LANGUAGES: tuple[Language, ...] = ("es", "fr", "ar", "wo")

# Wildcard value for the type and site filters
ALL = "ALL"


def doc_type_label_key(doc_type: DocType) -> str:
    """Localization key for a document type badge."""
    match doc_type:
        case "WORK_INSTRUCTION":
            return "doc_type_instruccion"
        case "SAFETY_SHEET":
            return "doc_type_fds"
        case "TECH_SHEET":
            return "doc_type_ft"
        case "MACHINE_MANUAL":
            return "doc_type_manual"
        case _:
            assert_never(doc_type)


def doc_type_label(doc_type: DocType) -> str:
    match doc_type:
        case "WORK_INSTRUCTION":
            return "Work Instruction"
        case "SAFETY_SHEET":
            return "Safety Data Sheet (SDS)"
        case "TECH_SHEET":
            return "Technical Sheet (TS)"
        case "MACHINE_MANUAL":
            return "Machine Manual"
        case _:
            assert_never(doc_type)


def doc_type_icon(doc_type: DocType) -> str:
    match doc_type:
        case "WORK_INSTRUCTION":
            return "🛠️"
        case "SAFETY_SHEET":
            return "⚠️"
        case "TECH_SHEET":
            return "📐"
        case "MACHINE_MANUAL":
            return "📘"
        case _:
            assert_never(doc_type)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class Site(BaseModel):
    id: str
    name: str
    location: str | None = None


class User(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    password: str = ""
    # Only meaningful for OPERARIO; ignored for ADMIN
    site_affinity: str | None = Field(
        default=None, description="Id of the single site an OPERARIO may view"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"


class Document(BaseModel):
    id: str
    title: str
    doc_type: DocType
    category: str
    external_url: str
    description: str = ""
    last_updated: date
    site_id: str = Field(..., description="Owning site; not checked against the site list")


class Session(BaseModel):
    user: User | None = None
    is_authenticated: bool = False

    @property
    def actor(self) -> User | None:
        return self.user if self.is_authenticated else None


# ---------------------------------------------------------------------------
# Partial records for create / update
# ---------------------------------------------------------------------------


class SiteDraft(BaseModel):
    name: str | None = None
    location: str | None = None


class UserDraft(BaseModel):
    name: str | None = None
    email: str | None = None
    role: Role | None = None
    password: str | None = None
    site_affinity: str | None = None


class DocumentDraft(BaseModel):
    title: str | None = None
    doc_type: DocType | None = None
    category: str | None = None
    external_url: str | None = None
    description: str | None = None
    site_id: str | None = None
