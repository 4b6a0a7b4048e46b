"""Attendance driven by fingerprint scans.

A successful scan checks the worker in when today has no check-in, checks
them out when they are checked in but not out, and otherwise reports the day
as already completed. The scan log is linked to the resulting record.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceAction, CheckOutMethod
from ..fingerprints.schemas import FingerprintScanRequest
from ..fingerprints.service import FingerprintService, Identification
from .model import AttendanceRecord, CheckOutResult
from .repository import AttendanceRepository
from .schemas import CheckInRequest, CheckOutRequest
from .service import AttendanceService


@dataclass(frozen=True)
class ScanOutcome:
    identification: Identification
    action: AttendanceAction
    record: Optional[AttendanceRecord] = None
    checkout: Optional[CheckOutResult] = None

    def payload(self) -> Dict[str, Any]:
        data = self.identification.payload()
        if self.record is not None:
            data["attendanceRecord"] = self.record
        data["attendanceAction"] = self.action
        data["fingerprintVerified"] = True
        return data

    def summary(self) -> Optional[dict]:
        return self.checkout.summary() if self.checkout else None


def next_action(record: Optional[AttendanceRecord]) -> AttendanceAction:
    if record is None or record.check_in_time is None:
        return AttendanceAction.CHECK_IN
    if record.check_out_time is None:
        return AttendanceAction.CHECK_OUT
    return AttendanceAction.ALREADY_COMPLETED


class FingerprintAttendanceService:
    def __init__(
        self,
        fingerprints: FingerprintService,
        attendance: AttendanceService,
        records: AttendanceRepository,
    ):
        self._fingerprints = fingerprints
        self._attendance = attendance
        self._records = records

    def preview(self, data: FingerprintScanRequest, *, now: datetime | None = None) -> ScanOutcome:
        """Identify the worker and report today's next action without recording it."""
        when = data.scan_time or now or now_local()
        match = self._fingerprints.identify_at_site(data, now=when)
        today = self._records.get_for_day(data.worker_id, data.site_id, when.date())
        return ScanOutcome(identification=match, action=next_action(today))

    def record(self, data: FingerprintScanRequest, *, now: datetime | None = None) -> ScanOutcome:
        when = data.scan_time or now or now_local()
        match = self._fingerprints.identify_at_site(data, now=when)
        today = self._records.get_for_day(data.worker_id, data.site_id, when.date())
        action = next_action(today)

        checkout: Optional[CheckOutResult] = None
        if action == AttendanceAction.CHECK_IN:
            request = CheckInRequest(worker_id=data.worker_id, site_id=data.site_id, check_in_time=when)
            record = self._attendance.check_in(request, fingerprint_verified=True).record
        elif action == AttendanceAction.CHECK_OUT:
            request = CheckOutRequest(
                worker_id=data.worker_id,
                site_id=data.site_id,
                check_out_time=when,
                check_out_method=CheckOutMethod.FINGERPRINT,
                fingerprint_verified=True,
            )
            checkout = self._attendance.check_out(request)
            record = checkout.record
        else:
            record = today

        self._fingerprints.link_attendance(match.log_id, record.id)
        return ScanOutcome(identification=match, action=action, record=record, checkout=checkout)
