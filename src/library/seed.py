"""Built-in dataset used whenever the store has no value for a key."""

from __future__ import annotations

from datetime import date

from src.library.models import Document, Session, Site, User

_SAMPLE_PDF = (
    "https://docs.google.com/viewer?url="
    "https://www.w3.org/WAI/ER/tests/xhtml/testfiles/resources/pdf/dummy.pdf"
)

SEED_SITES: list[Site] = [
    Site(id="c1", name="Planta Principal - Madrid", location="Getafe"),
    Site(id="c2", name="Centro Logístico - Barcelona", location="El Prat"),
]

SEED_USERS: list[User] = [
    User(
        id="1",
        name="Administrador Sistema",
        email="admin@indudocs.com",
        role="ADMIN",
        password="admin",
    ),
    User(
        id="2",
        name="Juan Operario Madrid",
        email="juan@indudocs.com",
        role="OPERARIO",
        password="user123",
        site_affinity="c1",
    ),
]

SEED_DOCUMENTS: list[Document] = [
    Document(
        id="d1",
        title="Procedimiento de Soldadura TIG",
        doc_type="WORK_INSTRUCTION",
        category="Producción",
        external_url=_SAMPLE_PDF,
        description="Instrucciones paso a paso para soldadura en acero inoxidable.",
        last_updated=date(2023, 10, 15),
        site_id="c1",
    ),
    Document(
        id="d2",
        title="Acetona Industrial - FDS",
        doc_type="SAFETY_SHEET",
        category="Químicos",
        external_url=_SAMPLE_PDF,
        description="Ficha de datos de seguridad para el manejo de acetona.",
        last_updated=date(2023, 11, 2),
        site_id="c1",
    ),
    Document(
        id="d3",
        title="Manual Torno CNC Mazak",
        doc_type="MACHINE_MANUAL",
        category="Mantenimiento",
        external_url=_SAMPLE_PDF,
        description="Manual de usuario y mantenimiento preventivo.",
        last_updated=date(2024, 1, 20),
        site_id="c2",
    ),
]


def seed_sites() -> list[Site]:
    return [site.model_copy() for site in SEED_SITES]


def seed_users() -> list[User]:
    return [user.model_copy() for user in SEED_USERS]


def seed_documents() -> list[Document]:
    return [doc.model_copy() for doc in SEED_DOCUMENTS]


def seed_session() -> Session:
    return Session()
