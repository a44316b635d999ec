"""
Staff Service - employees and daily attendance

Salary data is sensitive: the API layer restricts staff writes to the
owner, this layer only enforces data rules.
"""
from datetime import date, datetime, timezone
from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pos_backend.core.errors import NotFoundError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.staff import AttendanceStatus, Staff, StaffAttendance
from pos_backend.database.session import commit_or_raise
from pos_backend.schemas.staff import AttendanceMark, AttendanceSummary, StaffCreate, StaffUpdate

logger = get_i18n_logger(__name__)


def today() -> date:
    return datetime.now(timezone.utc).date()


class StaffService:

    @staticmethod
    async def list_active(db: AsyncSession) -> List[Staff]:
        result = await db.execute(
            select(Staff).where(Staff.is_active.is_(True)).order_by(Staff.name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_active(db: AsyncSession) -> int:
        result = await db.execute(
            select(func.count(Staff.id)).where(Staff.is_active.is_(True))
        )
        return result.scalar_one()

    @staticmethod
    async def get_staff(db: AsyncSession, staff_id: int) -> Staff:
        staff = await db.get(Staff, staff_id)
        if staff is None:
            raise NotFoundError("Staff member", staff_id)
        return staff

    @staticmethod
    async def create_staff(db: AsyncSession, data: StaffCreate) -> Staff:
        """
        Raises:
            ValidationError: employee_id already taken
        """
        staff = Staff(**data.model_dump())
        db.add(staff)
        await commit_or_raise(db, conflict_message=f"Employee id {data.employee_id} already exists")
        await db.refresh(staff)
        logger.info("staff.created", name=staff.name, role=staff.role)
        return staff

    @staticmethod
    async def update_staff(db: AsyncSession, staff_id: int, data: StaffUpdate) -> Staff:
        staff = await StaffService.get_staff(db, staff_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(staff, field, value)

        await commit_or_raise(db)
        await db.refresh(staff)
        logger.info("staff.updated", name=staff.name, fields=", ".join(sorted(changes)))
        return staff

    @staticmethod
    async def mark_attendance(db: AsyncSession, data: AttendanceMark) -> StaffAttendance:
        """
        Record attendance for a staff member on a day.

        A second mark for the same (staff, date) overwrites the first one.

        Args:
            db: Database session
            data: staff id, status, optional date (defaults to today) and times

        Returns:
            The stored attendance record

        Raises:
            NotFoundError: unknown staff id
        """
        staff = await StaffService.get_staff(db, data.staff_id)
        day = data.date or today()

        result = await db.execute(
            select(StaffAttendance).where(
                StaffAttendance.staff_id == staff.id,
                StaffAttendance.date == day,
            )
        )
        record = result.scalar_one_or_none()

        if record is None:
            record = StaffAttendance(staff_id=staff.id, date=day)
            db.add(record)
            log_key = "attendance.marked"
        else:
            log_key = "attendance.replaced"

        record.status = data.status
        record.check_in_time = data.check_in_time
        record.check_out_time = data.check_out_time

        await commit_or_raise(db)
        await db.refresh(record)
        logger.info(log_key, name=staff.name, status=record.status.value, date=day.isoformat())
        return record

    @staticmethod
    async def attendance_for(db: AsyncSession, day: Optional[date] = None) -> List[StaffAttendance]:
        """Attendance records of a day with their staff loaded"""
        result = await db.execute(
            select(StaffAttendance)
            .where(StaffAttendance.date == (day or today()))
            .options(selectinload(StaffAttendance.staff))
            .order_by(StaffAttendance.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def attendance_summary(db: AsyncSession, day: Optional[date] = None) -> AttendanceSummary:
        day = day or today()
        records = await StaffService.attendance_for(db, day)
        total_staff = await StaffService.count_active(db)

        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        absent = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
        half_day = sum(1 for r in records if r.status == AttendanceStatus.HALF_DAY)

        return AttendanceSummary(
            date=day,
            total_staff=total_staff,
            present=present,
            absent=absent,
            half_day=half_day,
            not_marked=max(total_staff - len(records), 0),
            on_duty=sum(1 for r in records if r.is_on_duty()),
        )
