"""API tests for the template catalogue endpoints."""
import pytest


@pytest.fixture
def catalogue(db):
    return db.seed(
        "document_templates",
        {"name": "Marksheet", "name_bn": "মার্কশীট", "type": "marksheets", "category": "academic",
         "description": "Academic marksheets", "is_active": True, "is_popular": False},
        {"name": "Fee Receipt", "name_bn": "ফি রসিদ", "type": "fee-receipts", "category": "finance",
         "description": "Student fee receipts", "required_credits": 2, "is_active": True, "is_popular": True},
        {"name": "Admit Card", "type": "admit-cards", "category": "academic",
         "description": "Exam admit cards", "is_active": False, "is_popular": False},
    )


def test_dashboard_lists_popular_first_then_by_name(client, catalogue):
    body = client.get("/api/supabase/documents/templates").json()
    assert [t["name"] for t in body] == ["Fee Receipt", "Admit Card", "Marksheet"]
    assert body[0]["creditsRequired"] == 2
    assert body[1]["creditsRequired"] == 1
    assert body[0]["documentId"] == "fee-receipts"


def test_dashboard_filters(client, catalogue):
    academic = client.get("/api/supabase/documents/templates", params={"category": "academic", "isActive": "true"}).json()
    assert [t["name"] for t in academic] == ["Marksheet"]
    everything = client.get("/api/supabase/documents/templates", params={"category": "all"}).json()
    assert len(everything) == 3
    found = client.get("/api/supabase/documents/templates", params={"search": "RECEIPT"}).json()
    assert [t["documentId"] for t in found] == ["fee-receipts"]


def test_dashboard_in_bengali(client, catalogue):
    body = client.get("/api/supabase/documents/templates", params={"lang": "bn"}).json()
    names = [t["name"] for t in body]
    assert names == ["ফি রসিদ", "Admit Card", "মার্কশীট"]


def test_categories_count_active_templates(client, catalogue):
    body = client.get("/api/supabase/documents/categories").json()
    assert body == [{"name": "academic", "count": 1}, {"name": "finance", "count": 1}]


def test_create_and_update_dashboard_template(client, db):
    created = client.post("/api/supabase/documents/templates", json={"name": "Notice", "type": "notices"}).json()
    assert created["required_credits"] == 1
    assert created["difficulty"] == "easy"
    assert created["is_active"] is True

    updated = client.patch(
        f"/api/supabase/documents/templates/{created['id']}", json={"isPopular": True}
    ).json()
    assert updated["is_popular"] is True
    assert updated["name"] == "Notice"
    assert db.writes()[-1][1] == "update"


def test_enhanced_templates(client, catalogue):
    created = client.post("/api/enhanced-templates", json={"name": "Routine", "type": "teacher-routines", "tags": ["staff"]}).json()
    assert created["is_default"] is False
    assert created["is_active"] is True

    finance = client.get("/api/enhanced-templates", params={"category": "finance"}).json()
    assert [t["name"] for t in finance] == ["Fee Receipt"]
    inactive = client.get("/api/enhanced-templates", params={"isActive": "false"}).json()
    assert [t["name"] for t in inactive] == ["Admit Card"]

    favourite = client.patch(f"/api/enhanced-templates/{created['id']}/favorite", json={"isFavorite": True}).json()
    assert favourite["is_favorite"] is True
