from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Optional

from pydantic import Field

from ..common.schemas import ApiModel, ListQuery, LocalDateTime, PositiveId
from ..core.enums import AttendanceStatus, CheckOutMethod

Hours = Annotated[float, Field(ge=0, le=24)]


class CheckInRequest(ApiModel):
    worker_id: PositiveId
    site_id: PositiveId
    check_in_time: Optional[LocalDateTime] = None
    notes: Optional[str] = Field(None, max_length=500)


class CheckOutRequest(ApiModel):
    worker_id: PositiveId
    site_id: PositiveId
    check_out_time: Optional[LocalDateTime] = None
    check_out_method: CheckOutMethod = CheckOutMethod.FINGERPRINT
    fingerprint_verified: bool = False
    notes: Optional[str] = Field(None, max_length=500)


class AttendanceCreate(ApiModel):
    worker_id: PositiveId
    site_id: PositiveId
    attendance_date: date
    check_in_time: Optional[LocalDateTime] = None
    check_out_time: Optional[LocalDateTime] = None
    total_hours: Optional[Hours] = None
    regular_hours: Optional[Hours] = None
    overtime_hours: Optional[Hours] = None
    break_time_minutes: int = Field(0, ge=0, le=1440)
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_out_method: CheckOutMethod = CheckOutMethod.FINGERPRINT
    fingerprint_verified: bool = False
    notes: Optional[str] = Field(None, max_length=500)


class AttendanceUpdate(ApiModel):
    check_in_time: Optional[LocalDateTime] = None
    check_out_time: Optional[LocalDateTime] = None
    total_hours: Optional[Hours] = None
    regular_hours: Optional[Hours] = None
    overtime_hours: Optional[Hours] = None
    break_time_minutes: Optional[int] = Field(None, ge=0, le=1440)
    status: Optional[AttendanceStatus] = None
    check_out_method: Optional[CheckOutMethod] = None
    fingerprint_verified: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=500)


class AttendanceListQuery(ListQuery):
    worker_id: Optional[PositiveId] = None
    site_id: Optional[PositiveId] = None
    status: Optional[AttendanceStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


class ManualAttendanceQuery(AttendanceListQuery):
    entry_type: Optional[Literal["check-in", "check-out"]] = Field(None, alias="type")
