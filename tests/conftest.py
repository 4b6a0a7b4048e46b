from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

import pytest

from src.workforce_system.workforce_system.attendance.fingerprint_attendance import FingerprintAttendanceService
from src.workforce_system.workforce_system.attendance.model import AttendanceRecord
from src.workforce_system.workforce_system.attendance.service import AttendanceService
from src.workforce_system.workforce_system.common.pagination import Page, PageRequest
from src.workforce_system.workforce_system.common.refs import SiteRef, WorkerRef
from src.workforce_system.workforce_system.container import Container
from src.workforce_system.workforce_system.core.enums import (
    CheckOutMethod,
    FingerPosition,
    Hand,
    PaymentStatus,
    PayPeriodType,
    WorkerStatus,
)
from src.workforce_system.workforce_system.fingerprints.matcher import FingerprintMatcher, MatchAttempt, classify
from src.workforce_system.workforce_system.fingerprints.model import FingerprintDevice, FingerprintLog, FingerprintTemplate
from src.workforce_system.workforce_system.fingerprints.service import FingerprintService
from src.workforce_system.workforce_system.job_types.model import JobType
from src.workforce_system.workforce_system.job_types.service import JobTypeService
from src.workforce_system.workforce_system.payroll.model import PayrollRecord
from src.workforce_system.workforce_system.payroll.service import PayrollService
from src.workforce_system.workforce_system.sites.model import ConstructionSite, SiteJobRate
from src.workforce_system.workforce_system.sites.service import SiteService
from src.workforce_system.workforce_system.workers.model import Worker
from src.workforce_system.workforce_system.workers.service import WorkerService


def _page(items: list, page: PageRequest) -> Page:
    return Page(items=items[page.offset : page.offset + page.limit], total=len(items), request=page)


class _Table:
    """Rows keyed by id with an auto-increment counter."""

    model: Any = None

    def __init__(self, rows: Sequence[Any] = ()):
        self.rows: dict[int, Any] = {r.id: r for r in rows}
        self._next_id = max(self.rows, default=0)

    def get_by_id(self, row_id: int):
        return self.rows.get(row_id)

    def create(self, values: Mapping[str, Any]) -> int:
        self._next_id += 1
        self.rows[self._next_id] = self.model(id=self._next_id, **dict(values))
        return self._next_id

    def update(self, row_id: int, changes: Mapping[str, Any]) -> bool:
        if row_id not in self.rows:
            return False
        self.rows[row_id] = replace(self.rows[row_id], **dict(changes))
        return True

    def delete(self, row_id: int) -> bool:
        return self.rows.pop(row_id, None) is not None

    def _find(self, **attrs):
        for row in self.rows.values():
            if all(getattr(row, k) == v for k, v in attrs.items()):
                return row
        return None


class InMemoryWorkers(_Table):
    model = Worker

    def __init__(self, rows=()):
        super().__init__(rows)
        self.attendance_counts: dict[int, int] = {}
        self.payroll_counts: dict[int, int] = {}

    def get_by_employee_id(self, employee_id: str) -> Optional[Worker]:
        return self._find(employee_id=employee_id)

    def get_by_national_id(self, national_id: str) -> Optional[Worker]:
        return self._find(national_id=national_id)

    def list(self, *, page, status=None, site_id=None, job_type_id=None, search=None):
        items = [
            w
            for w in self.rows.values()
            if (status is None or w.status == status)
            and (site_id is None or w.assigned_site_id == site_id)
            and (job_type_id is None or w.job_type_id == job_type_id)
            and (not search or search.lower() in f"{w.full_name} {w.employee_id}".lower())
        ]
        return _page(items, page)

    def list_active(self, *, site_id=None):
        return [w for w in self.rows.values() if w.is_active and (site_id is None or w.assigned_site_id == site_id)]

    def count_attendance_records(self, worker_id: int) -> int:
        return self.attendance_counts.get(worker_id, 0)

    def count_payroll_records(self, worker_id: int) -> int:
        return self.payroll_counts.get(worker_id, 0)


class InMemorySites(_Table):
    model = ConstructionSite

    def __init__(self, rows=(), job_rates: Sequence[SiteJobRate] = ()):
        super().__init__(rows)
        self.job_rates: list[SiteJobRate] = list(job_rates)

    def get_by_code(self, site_code: str) -> Optional[ConstructionSite]:
        return self._find(site_code=site_code)

    def list(self, *, page, status=None, is_active=None, search=None):
        items = [
            s
            for s in self.rows.values()
            if (status is None or s.status == status)
            and (is_active is None or s.is_active == is_active)
            and (not search or search.lower() in s.site_name.lower())
        ]
        return _page(items, page)

    def list_job_rates(self, site_id: int):
        return [r for r in self.job_rates if r.site_id == site_id]

    def get_job_rate(self, site_id: int, job_type_id: int) -> Optional[SiteJobRate]:
        for rate in self.job_rates:
            if rate.site_id == site_id and rate.job_type_id == job_type_id:
                return rate
        return None

    def create_job_rate(self, *, site_id, job_type_id, site_specific_rate, effective_date) -> int:
        rate_id = len(self.job_rates) + 1
        self.job_rates.append(
            SiteJobRate(
                id=rate_id,
                site_id=site_id,
                job_type_id=job_type_id,
                site_specific_rate=site_specific_rate,
                effective_date=effective_date,
            )
        )
        return rate_id


class InMemoryJobTypes(_Table):
    model = JobType

    def get_by_code(self, job_code: str) -> Optional[JobType]:
        return self._find(job_code=job_code)

    def list(self, *, page, category=None, is_active=None, search=None):
        items = [
            j
            for j in self.rows.values()
            if (category is None or j.category == category)
            and (is_active is None or j.is_active == is_active)
            and (not search or search.lower() in j.job_name.lower())
        ]
        return _page(items, page)


class InMemoryAttendance(_Table):
    model = AttendanceRecord

    def get_for_day(self, worker_id: int, site_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        return self._find(worker_id=worker_id, site_id=site_id, attendance_date=attendance_date)

    def _matching(self, *, worker_id=None, site_id=None, status=None, date_from=None, date_to=None, manual_only=False):
        return [
            r
            for r in self.rows.values()
            if (worker_id is None or r.worker_id == worker_id)
            and (site_id is None or r.site_id == site_id)
            and (status is None or r.status == status)
            and (date_from is None or r.attendance_date >= date_from)
            and (date_to is None or r.attendance_date <= date_to)
            and (not manual_only or r.is_manual)
        ]

    def list(
        self,
        *,
        page,
        worker_id=None,
        site_id=None,
        status=None,
        date_from=None,
        date_to=None,
        search=None,
        manual_only=False,
        entry_type=None,
    ):
        items = self._matching(
            worker_id=worker_id,
            site_id=site_id,
            status=status,
            date_from=date_from,
            date_to=date_to,
            manual_only=manual_only,
        )
        if entry_type == "check-in":
            items = [r for r in items if r.check_out_time is None]
        elif entry_type == "check-out":
            items = [r for r in items if r.check_out_time is not None]
        return _page(items, page)

    def count_by_status(self, *, manual_only=False, date_from=None, date_to=None):
        counts: dict[str, int] = {}
        for r in self._matching(date_from=date_from, date_to=date_to, manual_only=manual_only):
            counts[r.status.value] = counts.get(r.status.value, 0) + 1
        return counts

    def list_for_period(self, *, worker_id, start, end, site_id=None, statuses=None):
        items = self._matching(worker_id=worker_id, site_id=site_id, date_from=start, date_to=end)
        if statuses is not None:
            items = [r for r in items if r.status in statuses]
        return sorted(items, key=lambda r: r.attendance_date)


class InMemoryTemplates(_Table):
    model = FingerprintTemplate

    def list(self, *, page, worker_id=None, finger_position=None, hand=None, is_active=None):
        items = [
            t
            for t in self.rows.values()
            if (worker_id is None or t.worker_id == worker_id)
            and (finger_position is None or t.finger_position == finger_position)
            and (hand is None or t.hand == hand)
            and (is_active is None or t.is_active == is_active)
        ]
        return _page(items, page)

    def list_active_for_worker(self, worker_id, *, finger_position=None, hand=None):
        items = [
            t
            for t in self.rows.values()
            if t.worker_id == worker_id
            and t.is_active
            and (finger_position is None or t.finger_position == finger_position)
            and (hand is None or t.hand == hand)
        ]
        return sorted(items, key=lambda t: t.quality_score, reverse=True)

    def find_active(self, worker_id, finger_position, hand):
        return self._find(worker_id=worker_id, finger_position=finger_position, hand=hand, is_active=True)


class InMemoryDevices(_Table):
    model = FingerprintDevice

    def get_by_device_id(self, device_id: str):
        return self._find(device_id=device_id)

    def get_by_serial(self, serial_number: str):
        return self._find(serial_number=serial_number)

    def list(self, *, page, site_id=None, is_online=None, is_active=None, search=None):
        items = [
            d
            for d in self.rows.values()
            if (site_id is None or d.site_id == site_id)
            and (is_online is None or d.is_online == is_online)
            and (is_active is None or d.is_active == is_active)
            and (not search or search.lower() in d.device_name.lower())
        ]
        return _page(items, page)


class InMemoryLogs(_Table):
    model = FingerprintLog

    def list(self, *, page, worker_id=None, device_id=None, match_result=None, date_from=None, date_to=None):
        items = [
            log
            for log in self.rows.values()
            if (worker_id is None or log.worker_id == worker_id)
            and (device_id is None or log.device_id == device_id)
            and (match_result is None or log.match_result == match_result)
        ]
        return _page(sorted(items, key=lambda log: log.scan_timestamp, reverse=True), page)

    def recent_for_template(self, template_id: int, limit: int):
        items = [log for log in self.rows.values() if log.matched_template_id == template_id]
        return sorted(items, key=lambda log: log.scan_timestamp, reverse=True)[:limit]

    def count_for_template(self, template_id: int) -> int:
        return sum(1 for log in self.rows.values() if log.matched_template_id == template_id)

    def count_for_device(self, device_pk: int) -> int:
        return sum(1 for log in self.rows.values() if log.device_id == device_pk)

    def link_attendance(self, log_id: int, attendance_record_id: int) -> bool:
        return self.update(log_id, {"attendance_record_id": attendance_record_id})


class InMemoryPayroll(_Table):
    model = PayrollRecord

    def __init__(self, rows=()):
        super().__init__(rows)
        self.failing_ids: set[int] = set()

    def get_for_period(self, worker_id, site_id, pay_period_start):
        return self._find(worker_id=worker_id, site_id=site_id, pay_period_start=pay_period_start)

    def _matching(self, *, site_id=None, worker_id=None, payment_status=None, pay_period_type=None, **_):
        return [
            r
            for r in self.rows.values()
            if (site_id is None or r.site_id == site_id)
            and (worker_id is None or r.worker_id == worker_id)
            and (payment_status is None or r.payment_status == payment_status)
            and (pay_period_type is None or r.pay_period_type == pay_period_type)
        ]

    def list(self, *, page, search=None, **filters):
        return _page(self._matching(**filters), page)

    def totals(self, **filters):
        items = self._matching(**filters)
        return {
            "gross_pay": round(sum(r.gross_pay for r in items), 2),
            "net_pay": round(sum(r.net_pay for r in items), 2),
        }

    def status_breakdown(self):
        groups: dict[str, list[PayrollRecord]] = {}
        for r in self.rows.values():
            groups.setdefault(r.payment_status.value, []).append(r)
        return [
            {"status": status, "count": len(items), "totalAmount": round(sum(r.net_pay for r in items), 2)}
            for status, items in groups.items()
        ]

    def list_payable(self, record_ids):
        return [self.rows[i] for i in record_ids if i in self.rows and self.rows[i].is_payable]

    def update(self, row_id, changes):
        if row_id in self.failing_ids:
            raise RuntimeError("payment gateway unavailable")
        return super().update(row_id, changes)


class ScriptedMatcher(FingerprintMatcher):
    """Deterministic matcher: each template scores its own quality, scans are always quality 90."""

    def __init__(self, scores: Optional[dict[int, int]] = None, scan_quality: int = 90):
        self.scores = scores or {}
        self.scan_quality = scan_quality

    def score(self, template, scan_data, *, threshold):
        match_score = self.scores.get(template.id, template.quality_score)
        result, error = classify(match_score, self.scan_quality, threshold)
        return MatchAttempt(
            template=template,
            match_score=match_score,
            scan_quality=self.scan_quality,
            result=result,
            error_message=error,
        )


DAY = date(2025, 3, 3)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


@dataclass
class World:
    workers: InMemoryWorkers
    sites: InMemorySites
    job_types: InMemoryJobTypes
    attendance: InMemoryAttendance
    templates: InMemoryTemplates
    devices: InMemoryDevices
    logs: InMemoryLogs
    payroll: InMemoryPayroll
    matcher: ScriptedMatcher

    day: date = DAY

    def at(self, hour: int, minute: int = 0, day: Optional[date] = None) -> datetime:
        return at(hour, minute, day or self.day)

    def add_closed_day(self, worker_id: int, site_id: int, day: date, *, regular: float, overtime: float, status):
        """A finished attendance day as payroll sees it."""
        return self.attendance.create(
            {
                "worker_id": worker_id,
                "site_id": site_id,
                "attendance_date": day,
                "check_in_time": at(8, day=day),
                "check_out_time": at(17, day=day),
                "total_hours": regular + overtime,
                "regular_hours": regular,
                "overtime_hours": overtime,
                "status": status,
                "check_out_method": CheckOutMethod.FINGERPRINT,
                "fingerprint_verified": True,
            }
        )

    def add_payroll(self, worker_id: int, net: float, status=PaymentStatus.CALCULATED) -> int:
        worker = self.workers.get_by_id(worker_id)
        return self.payroll.create(
            {
                "worker_id": worker_id,
                "site_id": worker.assigned_site_id,
                "pay_period_start": datetime(2025, 3, 1),
                "pay_period_end": datetime(2025, 3, 31, 23, 59, 59),
                "pay_period_type": PayPeriodType.MONTHLY,
                "gross_pay": net,
                "net_pay": net,
                "payment_status": status,
                "worker": WorkerRef(
                    id=worker.id,
                    employee_id=worker.employee_id,
                    first_name=worker.first_name,
                    last_name=worker.last_name,
                ),
            }
        )

    def container(self) -> Container:
        attendance_service = AttendanceService(self.attendance, self.workers, self.sites)
        fingerprint_service = FingerprintService(
            self.templates,
            self.devices,
            self.logs,
            self.workers,
            self.sites,
            matcher=self.matcher,
        )
        return Container(
            conn=None,
            workers_repo=self.workers,
            sites_repo=self.sites,
            job_types_repo=self.job_types,
            attendance_repo=self.attendance,
            payroll_repo=self.payroll,
            worker_service=WorkerService(self.workers, self.sites, self.job_types),
            site_service=SiteService(self.sites, self.job_types),
            job_type_service=JobTypeService(self.job_types),
            attendance_service=attendance_service,
            fingerprint_service=fingerprint_service,
            fingerprint_attendance_service=FingerprintAttendanceService(
                fingerprint_service, attendance_service, self.attendance
            ),
            payroll_service=PayrollService(self.payroll, self.attendance, self.workers, self.sites, self.job_types),
        )


@pytest.fixture
def world() -> World:
    """Two sites, two trades and three workers.

    Worker 1 (Jean, mason) and worker 3 (Eric, on leave) belong to Kigali
    Heights; worker 2 (Alice, helper) belongs to Musanze Bridge, which pays
    helpers 6000 instead of 5000. Jean has one enrolled right thumb and the
    Kigali device is online.
    """
    kigali = ConstructionSite(
        id=1,
        site_code="KGL-001",
        site_name="Kigali Heights",
        province="Kigali",
        district="Gasabo",
        sector="Kimihurura",
        cell="Rugando",
        village="Urugwiro",
        working_hours_start="08:00",
        working_hours_end="17:00",
        standard_hours_per_day=8.0,
    )
    musanze = ConstructionSite(
        id=2,
        site_code="MSZ-001",
        site_name="Musanze Bridge",
        province="Northern",
        district="Musanze",
        sector="Muhoza",
        cell="Cyabararika",
        village="Mpenge",
        working_hours_start="07:00",
        working_hours_end="16:00",
        standard_hours_per_day=8.0,
    )
    mason = JobType(
        id=1,
        job_code="MASON",
        job_name="Mason",
        description=None,
        category=None,
        base_daily_rate=10000.0,
        overtime_multiplier=1.5,
    )
    helper = JobType(
        id=2,
        job_code="HELPER",
        job_name="Helper",
        description=None,
        category=None,
        base_daily_rate=5000.0,
        overtime_multiplier=1.5,
    )
    workers = [
        Worker(
            id=1,
            employee_id="EMP-001",
            first_name="Jean",
            last_name="Mugisha",
            assigned_site_id=1,
            job_type_id=1,
            site=SiteRef(id=1, site_code="KGL-001", site_name="Kigali Heights"),
        ),
        Worker(
            id=2,
            employee_id="EMP-002",
            first_name="Alice",
            last_name="Uwase",
            assigned_site_id=2,
            job_type_id=2,
            national_id="1199080012345678",
        ),
        Worker(
            id=3,
            employee_id="EMP-003",
            first_name="Eric",
            last_name="Habimana",
            status=WorkerStatus.ON_LEAVE,
            assigned_site_id=1,
            job_type_id=1,
        ),
    ]
    templates = [
        FingerprintTemplate(
            id=1,
            worker_id=1,
            template_data="tmpl-jean-right-thumb",
            finger_position=FingerPosition.THUMB,
            hand=Hand.RIGHT,
            quality_score=92,
        )
    ]
    devices = [
        FingerprintDevice(id=1, device_id="DEV-KGL-01", device_name="Kigali gate", site_id=1, is_online=True),
        FingerprintDevice(id=2, device_id="DEV-KGL-02", device_name="Kigali yard", site_id=1, is_online=False),
    ]
    return World(
        workers=InMemoryWorkers(workers),
        sites=InMemorySites(
            [kigali, musanze],
            job_rates=[SiteJobRate(id=1, site_id=2, job_type_id=2, site_specific_rate=6000.0)],
        ),
        job_types=InMemoryJobTypes([mason, helper]),
        attendance=InMemoryAttendance(),
        templates=InMemoryTemplates(templates),
        devices=InMemoryDevices(devices),
        logs=InMemoryLogs(),
        payroll=InMemoryPayroll(),
        matcher=ScriptedMatcher(),
    )

