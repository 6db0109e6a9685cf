from __future__ import annotations

from datetime import date

from dayflow.core.enums import AttendanceStatus, Role
from dayflow.main import create_app


def _attendance(container, user_id):
    return {row["date"]: row["status"] for row in container.attendance_repo.list_range(user_id=user_id)}


def test_submit_creates_pending_request_and_leave_days(client, login, container, users):
    login(users.alice, Role.EMPLOYEE)

    resp = client.post(
        "/api/leave",
        json={"leave_type": "paid", "start_date": "2026-06-29", "end_date": "2026-07-01", "remarks": "trip"},
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Leave request submitted successfully"
    leave = container.leave_repo.get_leave(request_id=body["id"])
    assert leave.status.value == "pending"
    assert _attendance(container, users.alice) == {
        "2026-06-29": "leave",
        "2026-06-30": "leave",
        "2026-07-01": "leave",
    }


def test_submit_overwrites_existing_attendance_day(client, login, container, users):
    container.attendance_repo.upsert_status(user_id=users.alice, work_date=date(2026, 7, 1), status=AttendanceStatus.PRESENT)
    login(users.alice, Role.EMPLOYEE)

    client.post("/api/leave", json={"leave_type": "sick", "start_date": "2026-07-01", "end_date": "2026-07-02"})

    assert _attendance(container, users.alice) == {"2026-07-01": "leave", "2026-07-02": "leave"}


def test_submit_with_start_after_end_is_400_and_writes_nothing(client, login, container, users):
    login(users.alice, Role.EMPLOYEE)

    resp = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-05", "end_date": "2026-07-01"})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Start date must be before end date"}
    assert container.leave_repo.list_leave_requests() == []
    assert _attendance(container, users.alice) == {}


def test_submit_with_bad_leave_type_is_400(client, login, users):
    login(users.alice, Role.EMPLOYEE)

    resp = client.post("/api/leave", json={"leave_type": "holiday", "start_date": "2026-07-01", "end_date": "2026-07-01"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid leave type"


def test_submit_requires_login(client):
    resp = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-01", "end_date": "2026-07-01"})

    assert resp.status_code == 401


def test_non_json_body_is_400(client, login, users):
    login(users.alice, Role.EMPLOYEE)

    resp = client.post("/api/leave", data="not json", content_type="text/plain")

    assert resp.status_code == 400


def test_my_leaves_only_returns_own_and_sanitizes(client, login, container, users):
    login(users.alice, Role.EMPLOYEE)
    client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-01", "end_date": "2026-07-01", "remarks": "fucking tired"})
    login(users.bob, Role.EMPLOYEE)
    client.post("/api/leave", json={"leave_type": "sick", "start_date": "2026-07-02", "end_date": "2026-07-02"})

    login(users.alice, Role.EMPLOYEE)
    rows = client.get("/api/leave/my-leaves").get_json()

    assert len(rows) == 1
    assert rows[0]["user_id"] == users.alice
    assert rows[0]["remarks"] == "***ing tired"


def test_all_leaves_is_admin_only(client, login, users):
    login(users.alice, Role.EMPLOYEE)

    assert client.get("/api/leave/all").status_code == 403


def test_all_leaves_joins_identity_and_filters_status(client, login, users):
    login(users.alice, Role.EMPLOYEE)
    first = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-01", "end_date": "2026-07-01"}).get_json()["id"]
    client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-08", "end_date": "2026-07-08"})

    login(users.hr, Role.HR)
    client.put(f"/api/leave/{first}/approve", json={"status": "approved"})

    everything = client.get("/api/leave/all").get_json()
    pending = client.get("/api/leave/all?status=pending").get_json()

    assert len(everything) == 2
    assert everything[0]["employee_id"] == "EMP003"
    assert everything[0]["first_name"] == "Alice"
    assert [row["status"] for row in pending] == ["pending"]


def test_approve_sets_status_approver_and_comment(client, login, container, users):
    login(users.alice, Role.EMPLOYEE)
    rid = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-01", "end_date": "2026-07-02"}).get_json()["id"]

    login(users.admin, Role.ADMIN)
    resp = client.put(f"/api/leave/{rid}/approve", json={"status": "approved", "admin_comment": "ok, fck it"})

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Leave request approved successfully"}
    leave = container.leave_repo.get_leave(request_id=rid)
    assert leave.status.value == "approved"
    assert leave.approved_by == users.admin
    assert leave.admin_comment == "ok, *** it"
    assert set(_attendance(container, users.alice).values()) == {"leave"}


def test_approving_twice_still_succeeds(client, login, users):
    login(users.alice, Role.EMPLOYEE)
    rid = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-01", "end_date": "2026-07-01"}).get_json()["id"]

    login(users.hr, Role.HR)
    first = client.put(f"/api/leave/{rid}/approve", json={"status": "approved"})
    second = client.put(f"/api/leave/{rid}/approve", json={"status": "approved"})

    assert first.status_code == 200
    assert second.status_code == 200


def test_reject_forces_absent_including_previously_present_days(client, login, container, users):
    container.attendance_repo.upsert_status(user_id=users.alice, work_date=date(2026, 7, 1), status=AttendanceStatus.PRESENT)
    login(users.alice, Role.EMPLOYEE)
    rid = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-01", "end_date": "2026-07-03"}).get_json()["id"]

    login(users.hr, Role.HR)
    resp = client.put(f"/api/leave/{rid}/approve", json={"status": "rejected", "admin_comment": "busy week"})

    assert resp.status_code == 200
    assert _attendance(container, users.alice) == {
        "2026-07-01": "absent",
        "2026-07-02": "absent",
        "2026-07-03": "absent",
    }


def test_approve_unknown_leave_is_404(client, login, users):
    login(users.hr, Role.HR)

    resp = client.put("/api/leave/999/approve", json={"status": "approved"})

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Leave request not found"}


def test_approve_with_invalid_status_is_400(client, login, users):
    login(users.hr, Role.HR)

    assert client.put("/api/leave/1/approve", json={"status": "maybe"}).status_code == 400


def test_employee_cannot_approve(client, login, users):
    login(users.alice, Role.EMPLOYEE)
    rid = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-07-01", "end_date": "2026-07-01"}).get_json()["id"]

    assert client.put(f"/api/leave/{rid}/approve", json={"status": "approved"}).status_code == 403


def test_leave_ending_on_last_representable_day(client, login, container, users):
    login(users.alice, Role.EMPLOYEE)

    resp = client.post("/api/leave", json={"leave_type": "paid", "start_date": "9999-12-31", "end_date": "9999-12-31"})

    assert resp.status_code == 201
    assert _attendance(container, users.alice) == {"9999-12-31": "leave"}


def test_my_leaves_returns_every_row(client, login, container, users):
    with container.conn.transaction():
        for day in range(1, 29):
            for month in range(1, 20):
                container.leave_repo.create_leave(
                    user_id=users.bob,
                    leave_type="paid",
                    start_date=date(2000 + month, 2, day),
                    end_date=date(2000 + month, 2, day),
                    remarks=None,
                )
    login(users.bob, Role.EMPLOYEE)

    assert len(client.get("/api/leave/my-leaves").get_json()) == 28 * 19


def test_restore_policy_with_overlapping_requests(tmp_path):
    app = create_app(
        {
            "SECRET_KEY": "test-secret",
            "DATABASE_PATH": str(tmp_path / "restore.db"),
            "AUTO_INIT_DB": True,
            "AUTO_SEED_DB": False,
            "LEAVE_REJECTION_POLICY": "restore",
        }
    )
    container = app.extensions["dayflow"]
    alice = container.users_repo.create_user(
        employee_id="EMP100", username="alice2", email="alice2@example.com", password_hash="x", role=Role.EMPLOYEE
    )
    hr = container.users_repo.create_user(
        employee_id="EMP101", username="hr2", email="hr2@example.com", password_hash="x", role=Role.HR
    )
    container.attendance_repo.upsert_status(user_id=alice, work_date=date(2026, 9, 1), status=AttendanceStatus.PRESENT)
    client = app.test_client()

    def as_user(user_id, role):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role.value

    as_user(alice, Role.EMPLOYEE)
    first = client.post("/api/leave", json={"leave_type": "paid", "start_date": "2026-09-01", "end_date": "2026-09-02"}).get_json()["id"]
    second = client.post("/api/leave", json={"leave_type": "sick", "start_date": "2026-09-01", "end_date": "2026-09-01"}).get_json()["id"]

    as_user(hr, Role.HR)
    client.put(f"/api/leave/{second}/approve", json={"status": "approved"})
    client.put(f"/api/leave/{first}/approve", json={"status": "rejected"})

    assert _attendance(container, alice) == {"2026-09-01": "leave"}

    client.put(f"/api/leave/{second}/approve", json={"status": "rejected"})

    assert _attendance(container, alice) == {"2026-09-01": "present"}
