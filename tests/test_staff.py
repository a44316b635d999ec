from datetime import date, datetime, timezone

from pos_backend.database.models import AttendanceStatus, Staff, StaffAttendance
from pos_backend.schemas.staff import AttendanceMark
from pos_backend.services.staff_service import StaffService
from sqlalchemy import select

NEW_STAFF = {
    "employee_id": "EMP001", "name": "Lakshmi", "role": "chef",
    "phone": "+91 98765 43210", "salary": "25000.00", "shift": "morning",
}


def cook(employee_id="EMP001", name="Lakshmi"):
    return Staff(employee_id=employee_id, name=name, role="chef", salary=25000)


def test_remarking_same_day_replaces_record(run_db, seed):
    staff = seed(cook())
    day = date(2026, 3, 14)

    run_db(lambda db: StaffService.mark_attendance(db, AttendanceMark(staff_id=staff.id, status="present", date=day)))
    run_db(lambda db: StaffService.mark_attendance(db, AttendanceMark(staff_id=staff.id, status="absent", date=day)))

    async def records(db):
        return (await db.execute(select(StaffAttendance))).scalars().all()

    stored = run_db(records)
    assert len(stored) == 1
    assert stored[0].status == AttendanceStatus.ABSENT


def test_summary_counts(run_db, seed):
    lakshmi, arun, kavya = seed(cook("EMP001", "Lakshmi"), cook("EMP002", "Arun"), cook("EMP003", "Kavya"))
    day = date(2026, 3, 14)
    now = datetime.now(timezone.utc)
    seed(
        StaffAttendance(staff_id=lakshmi.id, date=day, status=AttendanceStatus.PRESENT, check_in_time=now),
        StaffAttendance(staff_id=arun.id, date=day, status=AttendanceStatus.HALF_DAY),
    )

    summary = run_db(lambda db: StaffService.attendance_summary(db, day))

    assert summary.total_staff == 3
    assert (summary.present, summary.absent, summary.half_day) == (1, 0, 1)
    assert summary.not_marked == 1
    assert summary.on_duty == 1


def test_only_owner_manages_staff(client, owner_headers, staff_headers):
    forbidden = client.post("/api/v1/staff", headers=staff_headers, json=NEW_STAFF)
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "This operation requires owner privileges"

    created = client.post("/api/v1/staff", headers=owner_headers, json=NEW_STAFF)
    assert created.status_code == 201, created.text

    duplicate = client.post("/api/v1/staff", headers=owner_headers, json=NEW_STAFF)
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Employee id EMP001 already exists"

    updated = client.patch(f"/api/v1/staff/{created.json()['id']}", headers=owner_headers,
                           json={"shift": "evening"})
    assert updated.json()["shift"] == "evening"
    assert updated.json()["role"] == "chef"


def test_attendance_today_over_http(client, owner_headers, seed):
    staff = seed(cook())

    marked = client.post("/api/v1/staff/attendance", headers=owner_headers, json={
        "staff_id": staff.id, "status": "present", "check_in_time": datetime.now(timezone.utc).isoformat(),
    })
    assert marked.status_code == 200, marked.text

    today = client.get("/api/v1/staff/attendance/today", headers=owner_headers).json()
    assert [(a["staff"]["name"], a["status"]) for a in today] == [("Lakshmi", "present")]

    summary = client.get("/api/v1/staff/attendance/today/summary", headers=owner_headers).json()
    assert summary["present"] == 1
    assert summary["on_duty"] == 1


def test_marking_unknown_staff_is_404(client, owner_headers):
    response = client.post("/api/v1/staff/attendance", headers=owner_headers,
                           json={"staff_id": 99, "status": "present"})
    assert response.status_code == 404
