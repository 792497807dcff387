"""API tests for academic terms."""


def test_create_and_filter_terms(client, db):
    created = client.post(
        "/api/enhanced-academic-terms",
        json={"name": "First Term", "nameBn": "প্রথম সাময়িক", "academicYearId": 2025, "startDate": "2025-01-01"},
    ).json()
    assert created["status"] == "upcoming"
    assert created["academic_year_id"] == 2025
    db.seed("academic_terms", {"name": "Old Term", "academic_year_id": 2024, "status": "completed"})

    terms = client.get("/api/enhanced-academic-terms", params={"academicYearId": 2025}).json()
    assert [t["name"] for t in terms] == ["First Term"]
    completed = client.get("/api/enhanced-academic-terms", params={"status": "completed"}).json()
    assert [t["name"] for t in completed] == ["Old Term"]
    assert [t["name"] for t in client.get("/api/enhanced-academic-terms").json()] == ["Old Term", "First Term"]


def test_update_only_sent_fields(client, db):
    db.seed("academic_terms", {"name": "Second Term", "description": "Keep me", "status": "upcoming"})
    updated = client.patch("/api/enhanced-academic-terms/1", json={"endDate": "2025-08-30"}).json()
    assert updated["end_date"] == "2025-08-30"
    assert updated["description"] == "Keep me"
    assert updated["updated_at"]


def test_term_status_and_delete(client, db):
    db.seed("academic_terms", {"name": "Final Term", "status": "upcoming"})
    assert client.patch("/api/enhanced-academic-terms/1/status", json={"status": "ongoing"}).json()["status"] == "ongoing"
    response = client.delete("/api/enhanced-academic-terms/1")
    assert response.json() == {"message": "Academic term deleted successfully"}
    assert db.tables["academic_terms"] == []
