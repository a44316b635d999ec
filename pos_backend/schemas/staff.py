"""
Staff and attendance schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date as Date
from decimal import Decimal
from pos_backend.database.models.staff import AttendanceStatus


class StaffBase(BaseModel):
    employee_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=50, description="chef, cashier, waiter, cleaner")
    phone: Optional[str] = Field(None, max_length=30)
    salary: Decimal = Field(..., ge=0)
    shift: Optional[str] = Field(None, max_length=30, description="morning, evening, full-day")


class StaffCreate(StaffBase):
    pass


class StaffUpdate(BaseModel):
    """All fields optional; employee_id is immutable"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=50)
    phone: Optional[str] = Field(None, max_length=30)
    salary: Optional[Decimal] = Field(None, ge=0)
    shift: Optional[str] = Field(None, max_length=30)
    is_active: Optional[bool] = None


class StaffResponse(StaffBase):
    id: int
    is_active: bool
    join_date: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AttendanceMark(BaseModel):
    staff_id: int
    status: AttendanceStatus
    date: Optional[Date] = Field(None, description="Defaults to today")
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None


class AttendanceResponse(BaseModel):
    id: int
    staff_id: int
    date: Date
    status: AttendanceStatus
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]

    model_config = {"from_attributes": True}


class AttendanceWithStaff(AttendanceResponse):
    staff: StaffResponse


class AttendanceSummary(BaseModel):
    date: Date
    total_staff: int
    present: int
    absent: int
    half_day: int
    not_marked: int
    on_duty: int
