from __future__ import annotations

from conftest import utc
from punch_api.core.config import settings
from punch_api.core.database import Base
from punch_api.models import AttendanceRecord


def login(client, employee_id="ATS0001"):
    response = client.post("/api/login", json={"employeeId": employee_id})
    assert response.status_code == 200
    return response


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_login_echoes_id(client):
    response = login(client)
    assert response.json() == {"message": "Login successful", "employeeId": "ATS0001"}


def test_login_rejects_bad_format(client):
    response = client.post("/api/login", json={"employeeId": "ATS0000"})
    assert response.status_code == 400
    assert "Invalid Employee ID format" in response.json()["error"]


def test_login_without_id_is_a_format_error(client):
    response = client.post("/api/login", json={})
    assert response.status_code == 400
    assert "Invalid Employee ID format" in response.json()["error"]


def test_malformed_json_is_400(client):
    response = client.post("/api/login", content="{not json", headers={"content-type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request"}


def test_punch_cycle_and_status(client):
    login(client)

    response = client.post("/api/punch", json={
        "employeeId": "ATS0001",
        "type": "punchin",
        "imageData": "data:image/jpeg;base64,AAAA",
        "location": {"latitude": 1, "longitude": 2},
    })
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Successfully punched in"
    assert body["timestamp"]

    status = client.get("/api/employee-status/ATS0001").json()
    assert status["isPunchedIn"] is True
    assert status["lastActionType"] == "punchin"
    assert status["location"] == {"latitude": 1.0, "longitude": 2.0}

    response = client.post("/api/punch", json={"employeeId": "ATS0001", "type": "punchout"})
    assert response.json()["message"] == "Successfully punched out"

    status = client.get("/api/employee-status/ATS0001").json()
    assert status["isPunchedIn"] is False
    assert status["lastActionType"] == "punchout"
    assert status["location"] == {"latitude": 1.0, "longitude": 2.0}


def test_punch_rejects_bad_type(client):
    login(client)
    response = client.post("/api/punch", json={"employeeId": "ATS0001", "type": "lunch"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid punch type"}


def test_punch_rejects_bad_id(client):
    response = client.post("/api/punch", json={"employeeId": "ATS1", "type": "punchin"})
    assert response.status_code == 400


def test_punch_for_unregistered_employee(client):
    response = client.post("/api/punch", json={"employeeId": "ATS0005", "type": "punchin"})
    assert response.status_code == 404
    assert response.json() == {"error": "Employee not found"}


def test_status_unknown_employee_is_404(client):
    response = client.get("/api/employee-status/ATS0009")
    assert response.status_code == 404


def test_status_bad_format_is_400(client):
    response = client.get("/api/employee-status/XYZ")
    assert response.status_code == 400


def test_status_without_location(client):
    login(client)
    client.post("/api/punch", json={"employeeId": "ATS0001", "type": "punchin"})

    status = client.get("/api/employee-status/ATS0001").json()
    assert status["isPunchedIn"] is True
    assert status["location"] is None


def test_records_shape(client, add_punch):
    add_punch("ATS0001", "punchin", utc(2024, 1, 1, 9), image_data="in", latitude=1, longitude=2)
    add_punch("ATS0001", "punchin", utc(2024, 1, 1, 9, 30))
    add_punch("ATS0001", "punchout", utc(2024, 1, 1, 17), image_data="out")
    add_punch("ATS0001", "punchout", utc(2024, 1, 1, 18), image_data="last")

    response = client.get("/api/records", params={"employeeId": "ATS0001", "date": "2024-01-01"})

    assert response.status_code == 200
    (entry,) = response.json()
    assert entry["employeeId"] == "ATS0001"
    assert entry["date"] == "2024-01-01"
    assert entry["punchIn"]["timestamp"] == 1704099600000
    assert entry["punchInImage"] == "in"
    assert entry["punchInLocation"] == {"latitude": 1.0, "longitude": 2.0}
    assert entry["punchOut"]["timestamp"] == 1704132000000
    assert entry["punchOutImage"] == "last"
    assert entry["punchOutLocation"] is None


def test_records_empty(client):
    response = client.get("/api/records")
    assert response.status_code == 200
    assert response.json() == []


def test_records_bad_date_is_400(client):
    response = client.get("/api/records", params={"date": "yesterday"})
    assert response.status_code == 400


def test_delete_records(client, db, add_punch):
    add_punch("ATS0001", "punchin", utc(2024, 1, 1, 9))
    add_punch("ATS0001", "punchin", utc(2024, 1, 2, 9))
    add_punch("ATS0002", "punchin", utc(2024, 1, 1, 9))

    response = client.request("DELETE", "/api/records", json={
        "records": [{"employeeId": "ATS0001", "date": "2024-01-01"}],
    })

    assert response.status_code == 200
    assert response.json() == {"message": "Records deleted successfully", "deleted": 1}
    assert db.query(AttendanceRecord).count() == 2


def test_delete_empty_selection(client, db, add_punch):
    add_punch("ATS0001", "punchin", utc(2024, 1, 1, 9))

    for body in ({"records": []}, {}):
        response = client.request("DELETE", "/api/records", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "No records selected for deletion"}

    response = client.delete("/api/records")
    assert response.status_code == 400
    assert db.query(AttendanceRecord).count() == 1


def test_database_failure_is_500(client, engine):
    Base.metadata.drop_all(bind=engine)

    response = client.get("/api/records")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_oversize_request_is_rejected(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_REQUEST_SIZE", 100)

    response = client.post("/api/punch", json={"employeeId": "ATS0001", "type": "punchin", "imageData": "A" * 500})

    assert response.status_code == 413


def test_empty_filters_mean_no_filter(client, add_punch):
    add_punch("ATS0001", "punchin", utc(2024, 1, 1, 9))

    response = client.get("/api/records", params={"employeeId": "", "date": ""})

    assert response.status_code == 200
    (entry,) = response.json()
    assert entry["employeeId"] == "ATS0001"


def test_records_bad_date_reports_format(client):
    response = client.get("/api/records", params={"date": "2024-13-01"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid date format. Use YYYY-MM-DD"}


def test_chunked_oversize_request_is_rejected(client, db, monkeypatch):
    login(client)
    monkeypatch.setattr(settings, "MAX_REQUEST_SIZE", 100)

    def body():
        yield b'{"employeeId": "ATS0001", "type": "punchin", "imageData": "'
        yield b"A" * 5000
        yield b'"}'

    response = client.post("/api/punch", content=body(), headers={"content-type": "application/json"})

    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}
    assert db.query(AttendanceRecord).count() == 0


def test_delete_non_array_selection(client, db, add_punch):
    add_punch("ATS0001", "punchin", utc(2024, 1, 1, 9))

    for records in ("x", {"employeeId": "ATS0001", "date": "2024-01-01"}, 5, None):
        response = client.request("DELETE", "/api/records", json={"records": records})
        assert response.status_code == 400
        assert response.json() == {"error": "No records selected for deletion"}

    assert db.query(AttendanceRecord).count() == 1
