"""
Unit tests for the site / user / document CRUD transforms.
"""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from src.library import mutators
from src.library.models import DocumentDraft, SiteDraft, UserDraft
from src.library.seed import seed_documents, seed_sites, seed_users

TODAY = date(2026, 10, 19)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class TestSaveDocument:
    def test_update_is_partial_merge(self):
        docs = seed_documents()
        doc1 = docs[0]
        result = mutators.save_document(docs, DocumentDraft(title="New"), editing=doc1, today=TODAY)

        updated = result[0]
        assert updated.title == "New"
        assert updated.last_updated == TODAY
        assert updated.model_dump(exclude={"title", "last_updated"}) == doc1.model_dump(
            exclude={"title", "last_updated"}
        )
        assert result[1:] == docs[1:]

    def test_update_does_not_mutate_input(self):
        docs = seed_documents()
        original_title = docs[0].title
        mutators.save_document(docs, DocumentDraft(title="New"), editing=docs[0], today=TODAY)
        assert docs[0].title == original_title

    def test_update_unknown_record_is_noop(self):
        docs = seed_documents()
        ghost = docs[0].model_copy(update={"id": "d-missing"})
        assert mutators.save_document(docs, DocumentDraft(title="X"), editing=ghost) == docs

    def test_create_appends_with_fresh_id(self):
        docs = seed_documents()
        draft = DocumentDraft(
            title="Plan de Emergencia",
            doc_type="WORK_INSTRUCTION",
            category="Seguridad",
            external_url="https://example.com/plan.pdf",
            description="Evacuación",
            site_id="c2",
        )
        result = mutators.save_document(docs, draft, today=TODAY)

        assert len(result) == len(docs) + 1
        assert result[:-1] == docs
        created = result[-1]
        assert created.id.startswith(mutators.DOCUMENT_PREFIX)
        assert created.id not in {d.id for d in docs}
        assert created.last_updated == TODAY

    def test_create_ids_are_unique(self):
        docs = seed_documents()
        draft = DocumentDraft(
            title="T", doc_type="TECH_SHEET", category="C", external_url="u", site_id="c1"
        )
        for _ in range(20):
            docs = mutators.save_document(docs, draft)
        assert len({d.id for d in docs}) == len(docs)

    def test_create_without_required_fields_raises(self):
        with pytest.raises(ValidationError):
            mutators.save_document(seed_documents(), DocumentDraft(title="Only a title"))


# ---------------------------------------------------------------------------
# Sites and users
# ---------------------------------------------------------------------------


class TestSaveSite:
    def test_create_site(self):
        sites = seed_sites()
        result = mutators.save_site(sites, SiteDraft(name="Planta Sevilla"))
        assert result[-1].name == "Planta Sevilla"
        assert result[-1].location is None
        assert result[-1].id.startswith(mutators.SITE_PREFIX)

    def test_update_can_clear_location(self):
        sites = seed_sites()
        result = mutators.save_site(sites, SiteDraft(location=None), editing=sites[0])
        assert result[0].location is None
        assert result[0].name == sites[0].name

    def test_unset_fields_are_kept(self):
        sites = seed_sites()
        result = mutators.save_site(sites, SiteDraft(name="Renamed"), editing=sites[1])
        assert result[1].location == "El Prat"


class TestSaveUser:
    def test_blank_password_keeps_current(self):
        users = seed_users()
        juan = users[1]
        result = mutators.save_user(users, UserDraft(name="Juan P.", password=""), editing=juan)
        assert result[1].name == "Juan P."
        assert result[1].password == "user123"

    def test_password_change(self):
        users = seed_users()
        result = mutators.save_user(users, UserDraft(password="s3cret"), editing=users[1])
        assert result[1].password == "s3cret"

    def test_promote_to_admin_clears_site(self):
        users = seed_users()
        result = mutators.save_user(
            users, UserDraft(role="ADMIN", site_affinity=None), editing=users[1]
        )
        assert result[1].role == "ADMIN"
        assert result[1].site_affinity is None

    def test_create_user(self):
        users = seed_users()
        draft = UserDraft(
            name="Ana", email="ana@indudocs.com", role="OPERARIO", password="pw", site_affinity="c2"
        )
        result = mutators.save_user(users, draft)
        assert result[-1].email == "ana@indudocs.com"
        assert result[-1].id.startswith(mutators.USER_PREFIX)


# ---------------------------------------------------------------------------
# Deletes
# ---------------------------------------------------------------------------


class TestDelete:
    def test_delete_document(self):
        docs = seed_documents()
        assert [d.id for d in mutators.delete_document(docs, "d2")] == ["d1", "d3"]

    def test_delete_site_does_not_cascade(self):
        sites = seed_sites()
        docs = seed_documents()
        result = mutators.delete_site(sites, "c1")
        assert [s.id for s in result] == ["c2"]
        assert docs == seed_documents()

    @pytest.mark.parametrize(
        "collection, delete",
        [
            (seed_sites, mutators.delete_site),
            (seed_users, mutators.delete_user),
            (seed_documents, mutators.delete_document),
        ],
    )
    def test_delete_unknown_id_is_noop(self, collection, delete):
        records = collection()
        assert delete(records, "does-not-exist") == records
