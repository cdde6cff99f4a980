"""
Unit tests for access-scoped document filtering.

Covers:
  - role scoping (OPERARIO pinned to site_affinity, ADMIN site filter)
  - case-insensitive title/description search
  - type filter and wildcard handling
  - ordering and anonymous actors
"""

from __future__ import annotations

from datetime import date

import pytest

from src.library.filters import DocumentFilter, apply_filter, filter_documents
from src.library.models import ALL, Document, User
from src.library.seed import seed_documents

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def make_doc(doc_id: str, site_id: str, title: str = "Doc", **overrides) -> Document:
    fields = {
        "id": doc_id,
        "title": title,
        "doc_type": "WORK_INSTRUCTION",
        "category": "Producción",
        "external_url": "https://example.com/doc.pdf",
        "description": "",
        "last_updated": date(2024, 1, 1),
        "site_id": site_id,
    }
    fields.update(overrides)
    return Document(**fields)


@pytest.fixture
def admin() -> User:
    return User(id="1", name="Admin", email="a@x.com", role="ADMIN", password="x")


@pytest.fixture
def operator() -> User:
    return User(
        id="2", name="Op", email="o@x.com", role="OPERARIO", password="x", site_affinity="c1"
    )


@pytest.fixture
def documents() -> list[Document]:
    return [
        make_doc("d1", "c1", "Soldadura TIG", description="Acero inoxidable"),
        make_doc("d2", "c2", "Carretilla elevadora", doc_type="MACHINE_MANUAL"),
        make_doc("d3", "c1", "Acetona Industrial", doc_type="SAFETY_SHEET"),
        make_doc("d4", "c3", "Lejía concentrada", doc_type="SAFETY_SHEET"),
        make_doc("d5", "c1", "Torno CNC", doc_type="MACHINE_MANUAL"),
    ]


def ids(docs: list[Document]) -> list[str]:
    return [d.id for d in docs]


# ---------------------------------------------------------------------------
# Role scoping
# ---------------------------------------------------------------------------


class TestRoleScoping:
    def test_operator_sees_only_own_site_in_order(self, documents, operator):
        result = filter_documents(documents, operator)
        assert ids(result) == ["d1", "d3", "d5"]

    def test_operator_ignores_site_filter(self, documents, operator):
        result = filter_documents(documents, operator, site_id="c2")
        assert ids(result) == ["d1", "d3", "d5"]

    def test_operator_without_site_sees_nothing(self, documents):
        drifter = User(id="9", name="N", email="n@x.com", role="OPERARIO")
        assert filter_documents(documents, drifter) == []

    def test_admin_all_sites_sees_everything(self, documents, admin):
        assert filter_documents(documents, admin, site_id=ALL) == documents

    @pytest.mark.parametrize("site_id", ["c1", "c2", "c3", "c404"])
    def test_admin_site_filter_is_exact(self, documents, admin, site_id):
        expected = [d for d in documents if d.site_id == site_id]
        assert filter_documents(documents, admin, site_id=site_id) == expected

    def test_anonymous_sees_nothing(self, documents):
        assert filter_documents(documents, None) == []


# ---------------------------------------------------------------------------
# Search and type
# ---------------------------------------------------------------------------


class TestSearch:
    def test_query_is_case_insensitive(self, documents, admin):
        assert ids(filter_documents(documents, admin, query="ACETONA")) == ["d3"]

    def test_query_matches_description(self, documents, admin):
        assert ids(filter_documents(documents, admin, query="inoxidable")) == ["d1"]

    def test_empty_query_matches_all(self, documents, admin):
        assert len(filter_documents(documents, admin, query="")) == len(documents)

    def test_whitespace_query_is_not_trimmed(self, documents, admin):
        # Only titles containing a literal space survive
        result = filter_documents(documents, admin, query=" ")
        assert ids(result) == ["d1", "d2", "d3", "d4", "d5"]
        assert filter_documents(documents, admin, query="  ") == []

    def test_type_filter(self, documents, admin):
        result = filter_documents(documents, admin, doc_type="SAFETY_SHEET")
        assert ids(result) == ["d3", "d4"]

    def test_all_filters_combine(self, documents, operator):
        result = filter_documents(documents, operator, query="torno", doc_type="MACHINE_MANUAL")
        assert ids(result) == ["d5"]

    def test_filter_does_not_mutate_input(self, documents, admin):
        before = [d.model_copy() for d in documents]
        filter_documents(documents, admin, query="x", doc_type="TECH_SHEET", site_id="c1")
        assert documents == before


class TestSeedData:
    def test_acetona_found_in_seed(self, admin):
        result = apply_filter(seed_documents(), admin, DocumentFilter(query="ACETONA"))
        assert [d.title for d in result] == ["Acetona Industrial - FDS"]

    def test_seed_operator_site(self, operator):
        result = apply_filter(seed_documents(), operator, DocumentFilter())
        assert ids(result) == ["d1", "d2"]
