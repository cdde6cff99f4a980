"""
REST API tests: FastAPI TestClient against a library on a temporary store.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.api.main import app, get_library


@pytest.fixture
def client(library):
    app.dependency_overrides[get_library] = lambda: library
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _login(client, email="admin@indudocs.com", password="admin"):
    return client.post("/api/login", json={"email": email, "password": password})


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_login_success_and_session(client):
    resp = _login(client)
    assert resp.status_code == 200
    assert resp.json()["role"] == "ADMIN"
    session = client.get("/api/session").json()
    assert session["is_authenticated"] is True


def test_login_failure_is_401(client):
    resp = _login(client, password="wrong")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"
    assert client.get("/api/session").json()["is_authenticated"] is False


def test_logout(client):
    _login(client)
    assert client.post("/api/logout").status_code == 204
    assert client.get("/api/documents").json() == []


def test_language_roundtrip(client):
    assert client.put("/api/language", json={"language": "wo"}).json() == {"language": "wo"}
    assert client.get("/api/language").json() == {"language": "wo"}
    assert client.put("/api/language", json={"language": "xx"}).status_code == 422


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def test_operator_documents_scoped(client):
    _login(client, "juan@indudocs.com", "user123")
    resp = client.get("/api/documents", params={"site": "c2"})
    assert [d["id"] for d in resp.json()] == ["d1", "d2"]


def test_admin_query_and_type(client):
    _login(client)
    resp = client.get("/api/documents", params={"query": "ACETONA", "type": "SAFETY_SHEET"})
    assert [d["title"] for d in resp.json()] == ["Acetona Industrial - FDS"]


def test_document_crud(client):
    _login(client)
    created = client.post(
        "/api/documents",
        json={
            "title": "Plan de Evacuación",
            "doc_type": "WORK_INSTRUCTION",
            "category": "Seguridad",
            "external_url": "https://example.com/plan.pdf",
            "description": "Rutas y puntos de encuentro",
            "site_id": "c2",
        },
    )
    assert created.status_code == 201
    doc_id = created.json()["id"]

    updated = client.put(f"/api/documents/{doc_id}", json={"category": "Emergencias"})
    assert updated.json()["category"] == "Emergencias"
    assert updated.json()["title"] == "Plan de Evacuación"

    assert client.delete(f"/api/documents/{doc_id}").status_code == 204
    assert doc_id not in [d["id"] for d in client.get("/api/documents").json()]


def test_incomplete_document_is_422(client):
    _login(client)
    assert client.post("/api/documents", json={"title": "Only title"}).status_code == 422


def test_operator_cannot_create(client):
    _login(client, "juan@indudocs.com", "user123")
    resp = client.post("/api/sites", json={"name": "Planta Sevilla"})
    assert resp.status_code == 403


def test_update_unknown_document_is_404(client):
    _login(client)
    assert client.put("/api/documents/nope", json={"title": "x"}).status_code == 404


def test_users_list_requires_admin(client):
    assert client.get("/api/users").status_code == 403
    _login(client)
    assert len(client.get("/api/users").json()) == 2


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------


def test_recover_unknown_is_404(client):
    assert client.post("/api/recover", json={"email": "nonexistent@x.com"}).status_code == 404


def test_recover_known(client):
    resp = client.post("/api/recover", json={"email": "juan@indudocs.com"})
    assert resp.status_code == 200
    assert resp.json()["generated"] is True


def test_ai_search_and_explain(client):
    _login(client)
    search = client.post("/api/search/ai", json={"query": "acetona"})
    assert search.json() == {"text": "generated text"}
    explain = client.post("/api/documents/d2/explain")
    assert explain.json() == {"text": "generated text"}


def test_chat(client):
    _login(client)
    resp = client.post("/api/chat", json={"message": "¿Qué EPI necesito?"})
    body = resp.json()
    assert body["reply"]["text"] == "echo: ¿Qué EPI necesito?"
    assert [m["role"] for m in body["messages"]] == ["model", "user", "model"]


def test_responses_never_include_passwords(client):
    assert "password" not in _login(client).json()
    session = client.get("/api/session").json()
    assert session["user"]["email"] == "admin@indudocs.com"
    assert "password" not in session["user"]
    users = client.get("/api/users").json()
    assert all("password" not in user for user in users)
    created = client.post(
        "/api/users",
        json={"name": "Ana", "email": "ana@indudocs.com", "role": "OPERARIO", "password": "pw"},
    )
    assert created.status_code == 201
    assert "password" not in created.json()
