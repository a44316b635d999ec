"""
Staff members and their daily attendance
"""
from sqlalchemy import (
    Column, Integer, String, Numeric, Boolean, Date, DateTime, ForeignKey,
    UniqueConstraint, Enum as SQLAlchemyEnum
)
from sqlalchemy.orm import relationship, validates
from datetime import datetime, timezone
from enum import StrEnum
from pos_backend.database.base import Base


class AttendanceStatus(StrEnum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class Staff(Base):
    """
    Employee record (chef, cashier, waiter, cleaner, ...).

    Separate from User: most employees never sign in to the POS.
    Salary is sensitive, so writes are owner-only at the API level.
    """
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False)
    phone = Column(String(30), nullable=True)
    salary = Column(Numeric(10, 2), nullable=False)
    shift = Column(String(30), nullable=True)  # morning, evening, full-day
    is_active = Column(Boolean, default=True, index=True)
    join_date = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    attendance = relationship(
        "StaffAttendance",
        back_populates="staff",
        order_by="StaffAttendance.date.desc()"
    )

    @validates('salary')
    def validate_salary(self, key, value):
        if value < 0:
            raise ValueError("Salary cannot be negative")
        return value

    def __repr__(self):
        return f"<Staff {self.employee_id} {self.name} ({self.role})>"


class StaffAttendance(Base):
    """
    Attendance for one staff member on one day.

    (staff_id, date) is unique: marking the same day twice replaces the
    earlier record instead of adding a second one.
    """
    __tablename__ = "staff_attendance"

    id = Column(Integer, primary_key=True, index=True)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(SQLAlchemyEnum(AttendanceStatus), nullable=False)
    check_in_time = Column(DateTime(timezone=True), nullable=True)
    check_out_time = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    staff = relationship("Staff", back_populates="attendance")

    __table_args__ = (
        UniqueConstraint('staff_id', 'date', name='unique_staff_attendance_day'),
    )

    def is_on_duty(self) -> bool:
        """Checked in and not yet checked out"""
        return (
            self.status == AttendanceStatus.PRESENT
            and self.check_in_time is not None
            and self.check_out_time is None
        )

    def __repr__(self):
        return f"<StaffAttendance staff={self.staff_id} {self.date} {self.status.value}>"
