from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.refs import SiteRef, WorkerRef
from ..common.serialization import hours_label
from ..core.enums import AttendanceStatus, CheckOutMethod


@dataclass(frozen=True)
class AttendanceRecord:
    """One worker's attendance at one site on one day."""

    id: int
    worker_id: int
    site_id: int
    attendance_date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    total_hours: Optional[float] = None
    regular_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    break_time_minutes: int = 0
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_out_method: CheckOutMethod = CheckOutMethod.FINGERPRINT
    fingerprint_verified: bool = False
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    worker: Optional[WorkerRef] = None
    site: Optional[SiteRef] = None

    @property
    def is_manual(self) -> bool:
        return self.check_out_method == CheckOutMethod.MANUAL and not self.fingerprint_verified


@dataclass(frozen=True)
class WorkedHours:
    total: float
    regular: float
    overtime: float


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    created: bool


@dataclass(frozen=True)
class CheckOutResult:
    record: AttendanceRecord
    hours: WorkedHours

    def summary(self) -> dict:
        return {
            "totalHours": hours_label(self.hours.total),
            "regularHours": hours_label(self.hours.regular),
            "overtimeHours": hours_label(self.hours.overtime),
            "status": self.record.status.value,
        }
