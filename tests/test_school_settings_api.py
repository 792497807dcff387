"""API tests for the single school settings row."""


def test_blank_settings_before_first_save(client, db):
    body = client.get("/api/school/settings").json()
    assert body["id"] is None
    assert body["name"] == ""
    assert body["timezone"] == "Asia/Dhaka"
    assert db.writes() == []
    assert client.get("/api/enhanced-school/settings").json() is None


def test_dashboard_creates_default_row_once(client, db):
    first = client.get("/api/supabase/school/settings").json()
    assert first["action"] == "created_default"
    assert first["source"] == "supabase_postgresql"
    assert first["data"]["name"] == "New Supabase School"
    assert first["data"]["address_in_bangla"] == "ঢাকা, বাংলাদেশ"

    second = client.get("/api/supabase/school/settings").json()
    assert "action" not in second
    assert second["data"]["id"] == first["data"]["id"]
    assert len(db.tables["school_settings"]) == 1


def test_save_creates_then_updates(client, db):
    created = client.post("/api/supabase/school/settings", json={"name": "Dhaka Model School", "enableSMS": True}).json()
    assert created["action"] == "created"
    assert created["data"]["name"] == "Dhaka Model School"
    assert created["data"]["enable_sms"] is True
    assert created["data"]["currency"] == "BDT"

    updated = client.post("/api/supabase/school/settings", json={"maxStudents": 1200}).json()
    assert updated["action"] == "updated"
    assert updated["data"]["max_students"] == 1200
    assert updated["data"]["name"] == "Dhaka Model School"
    assert len(db.tables["school_settings"]) == 1


def test_info_and_branding_share_one_row(client, db):
    info = client.put("/api/enhanced-school/info", json={"name": "Rajshahi Collegiate", "eiin": "126543"}).json()
    branding = client.put("/api/enhanced-school/branding", json={"primaryColor": "#0F766E", "motto": "Learn and lead"}).json()
    assert branding["id"] == info["id"]
    row = client.get("/api/school/settings").json()
    assert row["name"] == "Rajshahi Collegiate"
    assert row["primary_color"] == "#0F766E"
    assert row["updated_at"]
    assert len(db.tables["school_settings"]) == 1
