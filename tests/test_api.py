"""Tests for the HTTP API."""

from tests.conftest import FailingStorage
from wastewatch.main import app
from wastewatch.services.report_service import ReportStore


def test_health(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_list_reports_defaults_to_newest(api_client):
    response = api_client.get("/api/reports")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 5
    assert [r["id"] for r in body["items"]] == ["1", "2", "3", "4", "5"]
    assert "wasteType" in body["items"][0]


def test_list_reports_with_filters(api_client):
    response = api_client.get(
        "/api/reports", params={"status": "pending", "sort": "priority"}
    )

    assert [r["id"] for r in response.json()["items"]] == ["1", "5"]


def test_list_reports_search(api_client):
    response = api_client.get("/api/reports", params={"search": "sector"})

    assert {r["id"] for r in response.json()["items"]} == {"1", "4", "5"}


def test_list_reports_rejects_unknown_status(api_client):
    response = api_client.get("/api/reports", params={"status": "closed"})

    assert response.status_code == 422


def test_reports_by_status(api_client):
    response = api_client.get("/api/reports/by-status/in_progress")

    assert [r["id"] for r in response.json()] == ["3"]


def test_get_report(api_client):
    assert api_client.get("/api/reports/2").json()["assignedTo"] == "1"
    assert api_client.get("/api/reports/missing").status_code == 404


def test_create_report(api_client):
    response = api_client.post(
        "/api/reports",
        json={"title": "Old laptop", "wasteType": "electronic", "address": "Block C"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["priority"] == "high"
    assert 15 <= body["creditsEarned"] <= 44
    assert api_client.get("/api/reports").json()["total"] == 6


def test_create_report_validation(api_client):
    response = api_client.post("/api/reports", json={"title": "x", "wasteType": "glass"})

    assert response.status_code == 422


def test_patch_report(api_client):
    response = api_client.patch("/api/reports/1", json={"priority": "critical"})

    assert response.status_code == 200
    assert response.json()["priority"] == "critical"


def test_patch_unknown_report(api_client):
    response = api_client.patch("/api/reports/missing", json={"priority": "low"})

    assert response.status_code == 404


def test_patch_rejects_immutable_field(api_client):
    response = api_client.patch("/api/reports/1", json={"aiConfidence": 10})

    assert response.status_code == 422


def test_bulk_update(api_client):
    response = api_client.post(
        "/api/reports/bulk",
        json={"ids": ["1", "5", "nope"], "updates": {"priority": "critical"}},
    )

    assert response.status_code == 200
    assert response.json()["total"] == 2
    critical = api_client.get("/api/reports", params={"priority": "critical"}).json()
    assert {r["id"] for r in critical["items"]} == {"1", "2", "4", "5"}


def test_manual_assign(api_client):
    response = api_client.post("/api/reports/1/assign", json={"staffId": "5"})

    assert response.status_code == 200
    body = response.json()
    assert body["report"]["status"] == "assigned"
    assert body["report"]["assignedTo"] == "5"
    assert body["staff"]["name"] == "Vikram Singh"


def test_manual_assign_unknown_staff(api_client):
    response = api_client.post("/api/reports/1/assign", json={"staffId": "42"})

    assert response.status_code == 404


def test_auto_assign(api_client):
    response = api_client.post("/api/reports/5/auto-assign")

    assert response.status_code == 200
    assert response.json()["staff"]["id"] == "3"


def test_auto_assign_unknown_report(api_client):
    assert api_client.post("/api/reports/missing/auto-assign").status_code == 404


def test_auto_assign_without_staff(api_client, staff_directory):
    for member in staff_directory.list_staff():
        staff_directory.record_workload(member.id, member.max_tasks)

    response = api_client.post("/api/reports/1/auto-assign")

    assert response.status_code == 409


def test_status_is_permissive(api_client):
    response = api_client.post("/api/reports/4/status", json={"status": "pending"})

    assert response.status_code == 200
    assert response.json()["status"] == "pending"


def test_transition_is_strict(api_client):
    response = api_client.post("/api/reports/4/transition", json={"status": "pending"})

    assert response.status_code == 409
    assert api_client.get("/api/reports/4").json()["status"] == "resolved"


def test_complete(api_client):
    response = api_client.post("/api/reports/3/complete")

    assert response.json()["status"] == "resolved"


def test_write_failure_returns_503(api_client):
    storage = FailingStorage()
    store = ReportStore(storage)
    store._reports = app.state.report_store.reports
    store.is_loaded = True
    storage.fail_writes = True
    app.state.report_store = store

    response = api_client.patch("/api/reports/1", json={"priority": "low"})

    assert response.status_code == 503
    assert store.get_report("1").priority.value == "high"


def test_staff_list(api_client):
    body = api_client.get("/api/staff").json()

    assert len(body) == 5
    assert body[0]["workloadPercent"] == 38


def test_staff_roster(api_client):
    body = api_client.get("/api/staff/roster").json()

    assert [m["id"] for m in body["items"]] == ["3", "1", "5", "2", "4"]
    assert body["activeCount"] == 4
    assert body["averageRating"] == 4.7


def test_best_staff(api_client):
    assert api_client.get("/api/staff/best").json()["id"] == "3"


def test_staff_tasks(api_client):
    assert [r["id"] for r in api_client.get("/api/staff/1/tasks").json()] == ["2"]
    assert api_client.get("/api/staff/99/tasks").status_code == 404


def test_dashboard_stats(api_client):
    body = api_client.get("/api/dashboard/stats").json()

    assert body["total"] == 5
    assert body["pending"] == 2
    assert body["assigned"] == 1
    assert body["inProgress"] == 1
    assert body["resolved"] == 1
    assert body["critical"] == 2
    assert body["byWasteType"] == {
        "plastic": 1, "organic": 1, "hazardous": 1, "electronic": 1, "mixed": 1,
    }
    assert body["totalCredits"] == 140
    assert body["topStaff"][0]["id"] == "3"
