from __future__ import annotations

import pytest

from edutrack.core.exceptions import StoreUnavailableError
from edutrack.main import create_app
from tests.fakes import admin, make_container, make_student, teacher


@pytest.fixture()
def container():
    return make_container(
        students=[make_student("CS101", "Asha"), make_student("CS102", "Bala")],
        teachers=[teacher("FAC01", "Dr. Rao")],
        admins=[admin("ADMIN01", "Root")],
    )


@pytest.fixture()
def client(container):
    app = create_app(container=container)
    return app.test_client()


def _open(client, teacher_id="FAC01", course="Algorithms"):
    resp = client.post("/api/sessions", json={"teacherId": teacher_id, "courseName": course})
    assert resp.status_code == 201
    return resp.get_json()["id"]


def _mark(client, session_id, roll, device, **display):
    return client.post(f"/api/sessions/{session_id}/mark", json={"rollNumber": roll, "deviceId": device, **display})


def test_mark_attendance_status_mapping(client):
    sid = _open(client)

    assert _mark(client, sid, "cs101", "D1").get_json() == {"success": True}

    dup = _mark(client, sid, "CS101", "D1")
    assert dup.status_code == 409
    assert dup.get_json()["code"] == "ALREADY_MARKED"

    proxy = _mark(client, sid, "CS102", "D1")
    assert proxy.status_code == 403
    assert proxy.get_json()["code"] == "DEVICE_ALREADY_USED"
    assert "Asha" in proxy.get_json()["error"]

    unknown = _mark(client, sid, "XX", "D9")
    assert unknown.status_code == 404
    assert unknown.get_json()["code"] == "UNKNOWN_IDENTITY"


def test_device_conflict_is_forbidden(client):
    sid = _open(client)
    _mark(client, sid, "CS101", "D1")
    other = _open(client, teacher_id="FAC02", course="Networks")

    resp = _mark(client, other, "CS101", "D2")

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "DEVICE_CONFLICT"


def test_closed_session_rejects_checkin(client):
    sid = _open(client)
    assert client.post(f"/api/sessions/{sid}/close").get_json()["isActive"] is False

    resp = _mark(client, sid, "CS101", "D1")

    assert resp.status_code == 404
    assert resp.get_json()["code"] == "SESSION_NOT_ACTIVE"


def test_missing_fields_are_bad_request(client):
    sid = _open(client)

    resp = _mark(client, sid, "CS101", "")
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID"

    assert client.post(f"/api/sessions/{sid}/mark", data="not json").status_code == 400


def test_roster_and_session_listing(client):
    first = _open(client, course="Algorithms")
    second = _open(client, course="Databases")
    _mark(client, second, "CS102", "DB", name="Bala K", section="C")

    roster = client.get(f"/api/sessions/{second}/attendance").get_json()
    assert [(r["rollNumber"], r["name"], r["section"], r["department"]) for r in roster] == [
        ("CS102", "Bala K", "C", "CSE")
    ]

    sessions = {s["id"]: s for s in client.get("/api/sessions?teacherId=fac01").get_json()}
    assert sessions[first]["isActive"] is False
    assert sessions[second]["isActive"] is True

    assert client.get("/api/sessions/NOPE").status_code == 404


def test_config_lock_and_login(client):
    assert client.get("/api/config").get_json()["isLoginLocked"] is False

    locked = client.post("/api/config", json={"isLoginLocked": True}).get_json()
    assert locked["isLoginLocked"] is True
    assert locked["lastUpdated"]

    resp = client.post("/api/auth/login", json={"role": "STUDENT", "identifier": "cs101", "password": "pw"})
    assert resp.status_code == 403
    assert resp.get_json()["code"] == "SYSTEM_LOCKED"

    resp = client.post("/api/auth/login", json={"role": "TEACHER", "identifier": "admin01", "password": "pw"})
    assert resp.get_json()["role"] == "ADMIN"

    client.post("/api/config", json={"isLoginLocked": False})
    resp = client.post("/api/auth/login", json={"role": "STUDENT", "identifier": "cs101", "password": "bad"})
    assert resp.status_code == 401


def test_register_and_manage_students(client, container):
    resp = client.post(
        "/api/auth/register",
        json={"identifier": "cs200", "name": "Chitra", "password": "pw", "role": "STUDENT"},
    )
    assert resp.status_code == 201

    again = client.post(
        "/api/auth/register",
        json={"identifier": "CS200", "name": "Chitra", "password": "pw", "role": "STUDENT"},
    )
    assert again.status_code == 409

    bulk = client.post(
        "/api/students/bulk",
        json={"students": [{"rollNumber": "cs300", "name": "D", "password": "pw"}, {"rollNumber": "cs200", "name": "C", "password": "pw"}]},
    )
    assert bulk.get_json() == {"success": True, "added": 1, "skipped": 1}

    sid = _open(client)
    _mark(client, sid, "CS200", "PHONE-1")
    assert client.get("/api/students/cs200").get_json()["deviceId"] == "PHONE-1"

    assert client.post("/api/students/cs200/reset-device").get_json() == {"success": True}
    assert client.get("/api/students/CS200").get_json()["deviceId"] is None

    assert client.delete("/api/students/cs300").status_code == 200
    assert client.get("/api/students/cs300").status_code == 404
    assert [s["rollNumber"] for s in client.get("/api/students").get_json()] == ["CS101", "CS102", "CS200"]


def test_teacher_endpoints(client):
    assert [t["identifier"] for t in client.get("/api/teachers").get_json()] == ["FAC01"]
    assert client.get("/api/teachers/fac01").get_json()["name"] == "Dr. Rao"
    assert client.post(
        "/api/auth/register", json={"identifier": "ADMIN99", "name": "X", "password": "pw", "role": "ADMIN"}
    ).status_code == 403
    assert client.delete("/api/teachers/FAC01").status_code == 200
    assert client.get("/api/teachers/FAC01").status_code == 404


def test_store_failures_surface_as_internal(container):
    def broken(*args, **kwargs):
        raise StoreUnavailableError()

    container.sessions_repo.find_active_by_id = broken
    client = create_app(container=container).test_client()

    resp = _mark(client, "S1", "CS101", "D1")
    assert resp.status_code == 500
    assert resp.get_json()["code"] == "STORE_UNAVAILABLE"


def test_bulk_import_with_non_object_rows_is_bad_request(client):
    resp = client.post(
        "/api/students/bulk",
        json={"students": [{"rollNumber": "cs400", "name": "E", "password": "pw"}, "CS401"]},
    )

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID"
    assert client.get("/api/students/cs400").status_code == 404


@pytest.mark.parametrize(
    "body",
    [
        {"role": "STUDENT", "identifier": "CS101", "password": 1234},
        {"role": "STUDENT", "identifier": ["CS101"], "password": "pw"},
        {"role": "STUDENT", "identifier": "CS101", "password": "   "},
    ],
)
def test_login_with_malformed_credentials_is_bad_request(client, body):
    resp = client.post("/api/auth/login", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID"
