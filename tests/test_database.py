"""Tests for the lazily built Supabase client and its fallback."""
import pytest

from schooldesk import config, database
from schooldesk.database import (
    DatabaseUnavailableError,
    FallbackClient,
    get_client,
    is_fallback,
    reset_client,
)
from schooldesk.main import app


@pytest.fixture(autouse=True)
def fresh_client():
    reset_client()
    yield
    reset_client()


def _credentials(monkeypatch, url, key):
    monkeypatch.setattr(config, "supabase_url", lambda: url)
    monkeypatch.setattr(config, "supabase_key", lambda: key)


def test_missing_credentials_use_fallback(monkeypatch):
    _credentials(monkeypatch, "", "")
    client = get_client()
    assert is_fallback(client)
    assert get_client() is client


QUERIES = {
    "select": lambda q: q.select("*").eq("id", 1).order("created_at", desc=True).limit(5),
    "insert": lambda q: q.insert({"title": "Exam"}),
    "update": lambda q: q.update({"is_read": True}).eq("recipient_id", 1).in_("id", [1, 2]),
    "delete": lambda q: q.delete().in_("id", [1, 2]),
}


@pytest.mark.parametrize("entry", ["table", "from_"])
@pytest.mark.parametrize("operation", sorted(QUERIES))
def test_fallback_queries_chain_and_fail_on_execute(entry, operation):
    start = getattr(FallbackClient(), entry)("notifications")
    query = QUERIES[operation](start)
    with pytest.raises(DatabaseUnavailableError) as excinfo:
        query.execute()
    assert excinfo.value.table == "notifications"
    assert str(excinfo.value) == "Database unavailable - Supabase connection failed"


def test_client_creation_error_uses_fallback(monkeypatch):
    _credentials(monkeypatch, "https://example.supabase.co", "anon-key")

    def broken(url, key):
        raise ValueError("invalid key")

    monkeypatch.setattr(database, "create_client", broken)
    assert is_fallback(get_client())


def test_configured_client_is_shared(monkeypatch):
    _credentials(monkeypatch, "https://example.supabase.co", "anon-key")
    created = []

    def fake_create(url, key):
        created.append((url, key))
        return object()

    monkeypatch.setattr(database, "create_client", fake_create)
    first = get_client()
    assert get_client() is first
    assert not is_fallback(first)
    assert created == [("https://example.supabase.co", "anon-key")]


def test_routes_answer_500_without_database(client):
    app.dependency_overrides[database.get_db] = FallbackClient
    response = client.get("/api/documents/templates")
    assert response.status_code == 500


def test_health_reports_fallback(client):
    app.dependency_overrides[database.get_db] = FallbackClient
    body = client.get("/test").json()
    assert body["backend"] == "✅ Running"
    assert body["database"] == "❌ Fallback client in use"
    assert body["connection_status"] == "Not Connected"


def test_health_checks_connected_database(client, db):
    body = client.get("/test").json()
    assert body["database"] == "✅ Connected & Working"
    assert ("document_templates", "select", []) in db.statements
