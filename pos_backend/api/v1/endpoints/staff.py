"""
Staff and attendance endpoints

Creating and editing staff records is owner-only (salaries).
"""
from fastapi import APIRouter, status
from typing import List
from pos_backend.core.dependencies import DbDependency, CurrentUser, OwnerUser
from pos_backend.schemas.staff import (
    AttendanceMark, AttendanceResponse, AttendanceSummary, AttendanceWithStaff,
    StaffCreate, StaffResponse, StaffUpdate
)
from pos_backend.services.staff_service import StaffService

router = APIRouter(tags=["Staff"])


@router.get("", response_model=List[StaffResponse])
async def list_staff(db: DbDependency, current_user: CurrentUser):
    return await StaffService.list_active(db)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=StaffResponse)
async def create_staff(staff: StaffCreate, db: DbDependency, owner: OwnerUser):
    return await StaffService.create_staff(db, staff)


# Attendance routes are declared before /{staff_id} so "attendance" is never read as an id
@router.get("/attendance/today", response_model=List[AttendanceWithStaff])
async def todays_attendance(db: DbDependency, current_user: CurrentUser):
    return await StaffService.attendance_for(db)


@router.get("/attendance/today/summary", response_model=AttendanceSummary)
async def todays_attendance_summary(db: DbDependency, current_user: CurrentUser):
    return await StaffService.attendance_summary(db)


@router.post("/attendance", response_model=AttendanceResponse)
async def mark_attendance(mark: AttendanceMark, db: DbDependency, current_user: CurrentUser):
    """Marking the same staff member twice on one day replaces the earlier record"""
    return await StaffService.mark_attendance(db, mark)


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(staff_id: int, update: StaffUpdate, db: DbDependency, owner: OwnerUser):
    return await StaffService.update_staff(db, staff_id, update)
