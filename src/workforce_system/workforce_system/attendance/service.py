from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict

from ..common.datetime_utils import now_local
from ..common.pagination import Page
from ..common.validators import require, require_found
from ..core.enums import AttendanceStatus, CheckOutMethod
from ..core.exceptions import ConflictError, NotFoundError
from ..sites.model import ConstructionSite
from ..sites.repository import SiteRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .factory import AttendanceStrategyFactory
from .hours import compute_worked_hours
from .model import AttendanceRecord, CheckInResult, CheckOutResult
from .repository import AttendanceRepository
from .schemas import (
    AttendanceCreate,
    AttendanceListQuery,
    AttendanceUpdate,
    CheckInRequest,
    CheckOutRequest,
    ManualAttendanceQuery,
)
from .strategies.base import CheckoutContext

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        sites: SiteRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._workers = workers
        self._sites = sites
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _worker_and_site(self, worker_id: int, site_id: int) -> tuple[Worker, ConstructionSite]:
        worker = require_found(self._workers.get_by_id(worker_id), "Worker not found")
        site = require_found(self._sites.get_by_id(site_id), "Construction site not found")
        require(worker.is_active, "Worker is not active")
        return worker, site

    def check_in(
        self,
        data: CheckInRequest,
        *,
        manual: bool = False,
        fingerprint_verified: bool = False,
        now: datetime | None = None,
    ) -> CheckInResult:
        when = data.check_in_time or now or now_local()
        worker, site = self._worker_and_site(data.worker_id, data.site_id)
        if not manual:
            require(worker.assigned_site_id == site.id, "Worker is not assigned to this site")

        stamp: Dict[str, Any] = {"check_in_time": when, "status": AttendanceStatus.PRESENT}
        if manual:
            stamp.update(check_out_method=CheckOutMethod.MANUAL, fingerprint_verified=False)
        elif fingerprint_verified:
            stamp.update(check_out_method=CheckOutMethod.FINGERPRINT, fingerprint_verified=True)
        if data.notes:
            stamp["notes"] = data.notes

        existing = self._attendance.get_for_day(worker.id, site.id, when.date())
        if existing:
            if existing.check_in_time is not None:
                raise ConflictError("Worker has already checked in today")
            self._attendance.update(existing.id, stamp)
            return CheckInResult(record=self._attendance.get_by_id(existing.id), created=False)

        new_id = self._attendance.create(
            {"worker_id": worker.id, "site_id": site.id, "attendance_date": when.date(), **stamp}
        )
        logger.info("Check-in worker=%s site=%s at %s (manual=%s)", worker.id, site.id, when, manual)
        return CheckInResult(record=self._attendance.get_by_id(new_id), created=True)

    def check_out(
        self,
        data: CheckOutRequest,
        *,
        manual: bool = False,
        now: datetime | None = None,
    ) -> CheckOutResult:
        when = data.check_out_time or now or now_local()
        worker, site = self._worker_and_site(data.worker_id, data.site_id)

        record = self._attendance.get_for_day(worker.id, site.id, when.date())
        require(
            record is not None and record.check_in_time is not None,
            "No check-in found for today. Worker must check in first.",
        )
        if record.check_out_time is not None:
            raise ConflictError("Worker has already checked out today")
        require(when >= record.check_in_time, "Check-out time cannot be before check-in time")

        hours = compute_worked_hours(record.check_in_time, when, site.standard_hours_per_day)
        ctx = CheckoutContext(
            check_in=record.check_in_time,
            check_out=when,
            site=site,
            current=record.status,
            hours=hours,
        )
        decision = self._factory.for_checkout(ctx).decide_checkout(ctx)

        changes: Dict[str, Any] = {
            "check_out_time": when,
            "total_hours": hours.total,
            "regular_hours": hours.regular,
            "overtime_hours": hours.overtime,
            "status": decision.status,
            "check_out_method": CheckOutMethod.MANUAL if manual else data.check_out_method,
            "fingerprint_verified": False if manual else data.fingerprint_verified,
        }
        if data.notes:
            changes["notes"] = data.notes
        self._attendance.update(record.id, changes)
        logger.info(
            "Check-out worker=%s site=%s total=%.2fh status=%s", worker.id, site.id, hours.total, decision.status.value
        )
        return CheckOutResult(record=self._attendance.get_by_id(record.id), hours=hours)

    def list_records(self, query: AttendanceListQuery) -> Page[AttendanceRecord]:
        return self._attendance.list(
            page=query.page_request(),
            worker_id=query.worker_id,
            site_id=query.site_id,
            status=query.status,
            date_from=query.date_from,
            date_to=query.date_to,
            search=query.search,
        )

    def list_manual(self, query: ManualAttendanceQuery) -> tuple[Page[AttendanceRecord], dict]:
        page = self._attendance.list(
            page=query.page_request(),
            worker_id=query.worker_id,
            site_id=query.site_id,
            status=query.status,
            date_from=query.date_from,
            date_to=query.date_to,
            search=query.search,
            manual_only=True,
            entry_type=query.entry_type,
        )
        breakdown = self._attendance.count_by_status(
            manual_only=True, date_from=query.date_from, date_to=query.date_to
        )
        return page, {"totalManualRecords": page.total, "statusBreakdown": breakdown}

    def get_record(self, record_id: int, *, manual_only: bool = False) -> AttendanceRecord:
        record = self._attendance.get_by_id(record_id)
        if record is None or (manual_only and not record.is_manual):
            raise NotFoundError("Manual attendance record not found" if manual_only else "Attendance record not found")
        return record

    def create_record(self, data: AttendanceCreate) -> AttendanceRecord:
        require_found(self._workers.get_by_id(data.worker_id), "Worker not found")
        require_found(self._sites.get_by_id(data.site_id), "Construction site not found")
        if self._attendance.get_for_day(data.worker_id, data.site_id, data.attendance_date):
            raise ConflictError("Attendance record already exists for this worker, site and date")
        new_id = self._attendance.create(data.model_dump())
        return self._attendance.get_by_id(new_id)

    def update_record(self, record_id: int, data: AttendanceUpdate, *, manual_only: bool = False) -> AttendanceRecord:
        self.get_record(record_id, manual_only=manual_only)
        changes = data.changes()
        if changes:
            self._attendance.update(record_id, changes)
        return self._attendance.get_by_id(record_id)

    def delete_record(self, record_id: int, *, manual_only: bool = False) -> None:
        self.get_record(record_id, manual_only=manual_only)
        self._attendance.delete(record_id)
