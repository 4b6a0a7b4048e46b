from __future__ import annotations

import pytest
from mysql.connector import IntegrityError
from mysql.connector.errorcode import ER_DUP_ENTRY, ER_NO_REFERENCED_ROW_2

from src.workforce_system.workforce_system.main import create_app


@pytest.fixture
def client(world, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=world.container())
    return app.test_client()


def test_check_in_then_duplicate(client):
    body = {"workerId": 1, "siteId": 1, "checkInTime": "2025-03-03T08:00:00"}

    resp = client.post("/api/attendance/check-in", json=body)
    assert resp.status_code == 201
    payload = resp.get_json()
    assert payload["success"] is True
    assert payload["message"] == "Check-in successful"
    assert payload["data"]["checkInTime"] == "2025-03-03T08:00:00"
    assert payload["data"]["status"] == "PRESENT"

    again = client.post("/api/attendance/check-in", json=body)
    assert again.status_code == 409
    assert again.get_json() == {"success": False, "error": "Worker has already checked in today"}


def test_check_out_returns_hours_summary(client):
    client.post("/api/attendance/check-in", json={"workerId": 1, "siteId": 1, "checkInTime": "2025-03-03T08:00:00"})

    resp = client.post(
        "/api/attendance/check-out", json={"workerId": 1, "siteId": 1, "checkOutTime": "2025-03-03T18:00:00"}
    )

    assert resp.status_code == 200
    payload = resp.get_json()
    assert payload["summary"] == {
        "totalHours": "10.00",
        "regularHours": "8.00",
        "overtimeHours": "2.00",
        "status": "OVERTIME",
    }
    assert payload["data"]["overtimeHours"] == 2.0


def test_check_out_without_check_in_is_bad_request(client):
    resp = client.post(
        "/api/attendance/check-out", json={"workerId": 1, "siteId": 1, "checkOutTime": "2025-03-03T17:00:00"}
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "No check-in found for today. Worker must check in first."


def test_invalid_body_lists_field_errors(client):
    resp = client.post("/api/attendance/check-in", json={"siteId": 0})

    assert resp.status_code == 400
    payload = resp.get_json()
    assert payload["success"] is False
    assert payload["error"] == "Invalid input data"
    assert {d["field"] for d in payload["details"]} == {"workerId", "siteId"}


def test_missing_entity_is_not_found(client):
    resp = client.get("/api/workers/99")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Worker not found"}


def test_unknown_route_and_method(client):
    assert client.get("/api/nowhere").get_json() == {"success": False, "error": "Resource not found"}
    resp = client.patch("/api/workers")
    assert resp.status_code == 405
    assert resp.get_json()["error"] == "Method not allowed"


def test_unexpected_failure_is_a_generic_500(client, world, monkeypatch):
    def broken(**_):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(world.workers, "list", broken)

    resp = client.get("/api/workers")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Failed to fetch workers"}


def test_worker_listing_is_paginated(client):
    resp = client.get("/api/workers?siteId=1&limit=1&status=")

    payload = resp.get_json()
    assert resp.status_code == 200
    assert len(payload["data"]) == 1
    assert payload["data"][0]["employeeId"] == "EMP-001"
    assert payload["pagination"] == {
        "page": 1,
        "limit": 1,
        "total": 2,
        "totalPages": 2,
        "hasNextPage": True,
        "hasPrevPage": False,
    }


def test_site_payload_carries_location_and_worker_count(client):
    payload = client.get("/api/sites/1").get_json()

    assert payload["data"]["siteCode"] == "KGL-001"
    assert payload["data"]["workers"] == 0
    assert payload["data"]["location"] == "Urugwiro, Rugando, Kimihurura, Gasabo, Kigali"


def test_fingerprint_verify(client):
    resp = client.post("/api/fingerprint/verify", json={"workerId": 1, "scanData": "live-scan"})

    assert resp.status_code == 200
    payload = resp.get_json()
    assert payload["message"] == "Fingerprint verification successful"
    assert payload["data"]["matchScore"] == 92
    assert payload["data"]["matchedTemplate"]["hand"] == "RIGHT"


def test_fingerprint_verify_without_templates(client):
    resp = client.post("/api/fingerprint/verify", json={"workerId": 2, "scanData": "live-scan"})

    assert resp.status_code == 404
    assert resp.get_json() == {
        "success": False,
        "error": "No fingerprint templates found for this worker",
        "data": {"matchResult": "NO_MATCH"},
    }


def test_fingerprint_check_records_attendance(client, world):
    scan = {"workerId": 1, "siteId": 1, "deviceId": 1, "scanData": "live-scan", "scanTime": "2025-03-03T07:58:00"}

    resp = client.post("/api/attendance/fingerprint-check", json=scan)

    assert resp.status_code == 200
    payload = resp.get_json()
    assert payload["message"] == "Fingerprint verification successful - check-in"
    assert payload["data"]["attendanceAction"] == "check-in"
    assert payload["data"]["fingerprintVerified"] is True
    assert payload["data"]["attendanceRecord"]["fingerprintVerified"] is True
    assert len(world.attendance.rows) == 1


def test_fingerprint_scan_only_previews(client, world):
    scan = {"workerId": 1, "siteId": 1, "deviceId": 1, "scanData": "live-scan"}

    resp = client.post("/api/fingerprint/scan", json=scan)

    assert resp.status_code == 200
    assert resp.get_json()["data"]["attendanceAction"] == "check-in"
    assert world.attendance.rows == {}


def test_payroll_process_requires_ids(client):
    resp = client.post("/api/payroll/process", json={"payrollRecordIds": [], "paymentMethod": "CASH"})

    assert resp.status_code == 400
    assert resp.get_json()["details"][0]["field"] == "payrollRecordIds"


def test_concurrent_duplicate_insert_is_a_conflict(client, world, monkeypatch):
    def lost_race(values):
        raise IntegrityError(msg="Duplicate entry for key 'uq_attendance_day'", errno=ER_DUP_ENTRY)

    monkeypatch.setattr(world.attendance, "create", lost_race)

    resp = client.post("/api/attendance/check-in", json={"workerId": 1, "siteId": 1})

    assert resp.status_code == 409
    assert resp.get_json() == {"success": False, "error": "Record already exists"}


def test_other_integrity_errors_stay_server_errors(client, world, monkeypatch):
    def broken_reference(values):
        raise IntegrityError(msg="Cannot add or update a child row", errno=ER_NO_REFERENCED_ROW_2)

    monkeypatch.setattr(world.attendance, "create", broken_reference)

    resp = client.post("/api/attendance/check-in", json={"workerId": 1, "siteId": 1})

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Failed to process check-in"}
