from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import end_of_day, epoch_millis, now_local
from ..common.pagination import Page
from ..common.validators import require, require_found
from ..core.constants import DEFAULT_PROCESSED_BY
from ..core.enums import AttendanceStatus, PaymentStatus, PayPeriodType
from ..core.exceptions import ConflictError, ValidationError
from ..job_types.repository import JobTypeRepository
from ..sites.repository import SiteRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayBreakdown, PayrollRecord
from .repository import PayrollRepository
from .schemas import PayrollCalculateRequest, PayrollCreate, PayrollListQuery, PayrollProcessRequest, PayrollUpdate

logger = logging.getLogger(__name__)

PAYABLE_ATTENDANCE = (AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.OVERTIME)


@dataclass(frozen=True)
class BatchReport:
    summary: Dict[str, Any]
    results: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    message: str = ""

    def payload(self) -> Dict[str, Any]:
        return {"summary": self.summary, "results": self.results, "errors": self.errors}


@dataclass(frozen=True)
class PayrollDetail:
    record: PayrollRecord
    attendance_records: Sequence[AttendanceRecord]


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        sites: SiteRepository,
        job_types: JobTypeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._attendance = attendance
        self._workers = workers
        self._sites = sites
        self._job_types = job_types
        self._calculator = calculator or StandardPayrollCalculator()

    def _breakdown(self, worker: Worker, site_id: int, start: datetime, end: datetime) -> PayBreakdown:
        """Apply the pay rule to the worker's payable attendance at ``site_id``.

        The daily rate is the site's rate for the job type when one exists,
        otherwise the job type's base rate.
        """
        require(worker.job_type_id is not None, "Worker has no job type assigned")
        job_type = require_found(self._job_types.get_by_id(worker.job_type_id), "Job type not found")
        site_rate = self._sites.get_job_rate(site_id, job_type.id)
        daily_rate = site_rate.site_specific_rate if site_rate else job_type.base_daily_rate

        records = self._attendance.list_for_period(
            worker_id=worker.id,
            site_id=site_id,
            start=start.date(),
            end=end.date(),
            statuses=PAYABLE_ATTENDANCE,
        )
        return self._calculator.calculate(
            records,
            daily_rate=float(daily_rate),
            overtime_multiplier=float(job_type.overtime_multiplier),
        )

    def _store(
        self,
        worker: Worker,
        site_id: int,
        start: datetime,
        end: datetime,
        period_type: PayPeriodType,
        calculated_by: Optional[str],
        breakdown: PayBreakdown,
    ) -> int:
        return self._payroll.create(
            {
                "worker_id": worker.id,
                "site_id": site_id,
                "pay_period_start": start,
                "pay_period_end": end,
                "pay_period_type": period_type,
                "payment_status": PaymentStatus.CALCULATED,
                "calculated_by": calculated_by or DEFAULT_PROCESSED_BY,
                **asdict(breakdown),
            }
        )

    # ---- batch operations ----

    def calculate(self, data: PayrollCalculateRequest) -> BatchReport:
        start = data.pay_period_start
        end = end_of_day(data.pay_period_end)
        workers = self._workers.list_active(site_id=data.site_id)

        results: List[Dict[str, Any]] = []
        errors: List[Dict[str, Any]] = []
        for worker in workers:
            entry = {"workerId": worker.id, "workerName": worker.full_name}
            if worker.assigned_site_id is None or worker.job_type_id is None:
                errors.append({**entry, "error": "Worker has no assigned site or job type"})
                continue
            if self._payroll.get_for_period(worker.id, worker.assigned_site_id, start):
                errors.append({**entry, "error": "Payroll record already exists for this period"})
                continue
            try:
                breakdown = self._breakdown(worker, worker.assigned_site_id, start, end)
                record_id = self._store(
                    worker, worker.assigned_site_id, start, end, data.pay_period_type, data.calculated_by, breakdown
                )
            except Exception as e:
                logger.warning("Payroll calculation failed for worker=%s: %s", worker.id, e)
                errors.append({**entry, "error": str(e)})
                continue
            results.append(
                {
                    **entry,
                    "employeeId": worker.employee_id,
                    "siteName": worker.site.site_name if worker.site else None,
                    "totalDaysWorked": breakdown.total_days_worked,
                    "regularPay": breakdown.regular_pay,
                    "overtimePay": breakdown.overtime_pay,
                    "grossPay": breakdown.gross_pay,
                    "netPay": breakdown.net_pay,
                    "payrollRecordId": record_id,
                }
            )

        summary = {
            "totalWorkers": len(workers),
            "successfulCalculations": len(results),
            "failedCalculations": len(errors),
            "totalGrossPay": round(sum(r["grossPay"] for r in results), 2),
            "totalNetPay": round(sum(r["netPay"] for r in results), 2),
            "payPeriod": f"{start.date().isoformat()} to {end.date().isoformat()}",
            "payPeriodType": data.pay_period_type,
        }
        logger.info("Payroll calculated for %s: %s ok, %s failed", summary["payPeriod"], len(results), len(errors))
        return BatchReport(
            summary=summary,
            results=results,
            errors=errors,
            message=f"Payroll calculation completed. {len(results)} successful, {len(errors)} failed.",
        )

    def process(self, data: PayrollProcessRequest, *, now: datetime | None = None) -> BatchReport:
        """Mark payable records as PAID, one at a time; a failed record does not stop the batch."""
        records = self._payroll.list_payable(data.payroll_record_ids)
        if not records:
            raise ValidationError("No valid payroll records found for processing")

        paid_at = now or now_local()
        processed_by = data.processed_by or DEFAULT_PROCESSED_BY
        results: List[Dict[str, Any]] = []
        errors: List[Dict[str, Any]] = []
        for record in records:
            worker_name = record.worker.full_name if record.worker else None
            reference = data.payment_reference or f"PAY-{record.id}-{epoch_millis(paid_at)}"
            try:
                self._payroll.update(
                    record.id,
                    {
                        "payment_status": PaymentStatus.PAID,
                        "payment_method": data.payment_method,
                        "payment_date": paid_at,
                        "payment_reference": reference,
                    },
                )
            except Exception as e:
                logger.exception("Payment processing failed for payroll record=%s", record.id)
                errors.append({"payrollRecordId": record.id, "workerName": worker_name, "error": str(e)})
                continue
            results.append(
                {
                    "payrollRecordId": record.id,
                    "workerName": worker_name,
                    "employeeId": record.worker.employee_id if record.worker else None,
                    "siteName": record.site.site_name if record.site else None,
                    "netPay": record.net_pay,
                    "paymentMethod": data.payment_method,
                    "paymentReference": reference,
                    "paymentDate": paid_at,
                }
            )

        summary = {
            "totalRecords": len(records),
            "successfulPayments": len(results),
            "failedPayments": len(errors),
            "totalAmount": round(sum(r["netPay"] for r in results), 2),
            "paymentMethod": data.payment_method,
            "processedBy": processed_by,
        }
        logger.info("Payments processed by %s: %s ok, %s failed", processed_by, len(results), len(errors))
        return BatchReport(
            summary=summary,
            results=results,
            errors=errors,
            message=f"Payment processing completed. {len(results)} successful, {len(errors)} failed.",
        )

    # ---- records ----

    def list_records(self, query: PayrollListQuery) -> tuple[Page[PayrollRecord], dict]:
        filters = dict(
            site_id=query.site_id,
            worker_id=query.worker_id,
            payment_status=query.payment_status,
            pay_period_type=query.pay_period_type,
            date_from=query.date_from,
            date_to=query.date_to,
        )
        page = self._payroll.list(page=query.page_request(), search=query.search, **filters)
        totals = self._payroll.totals(**filters)
        summary = {
            "totalGrossPay": totals["gross_pay"],
            "totalNetPay": totals["net_pay"],
            "totalRecords": page.total,
            "statusBreakdown": self._payroll.status_breakdown(),
        }
        return page, summary

    def get_record(self, record_id: int) -> PayrollRecord:
        return require_found(self._payroll.get_by_id(record_id), "Payroll record not found")

    def get_detail(self, record_id: int) -> PayrollDetail:
        record = self.get_record(record_id)
        attendance = self._attendance.list_for_period(
            worker_id=record.worker_id,
            site_id=record.site_id,
            start=record.pay_period_start.date(),
            end=record.pay_period_end.date(),
        )
        return PayrollDetail(record=record, attendance_records=attendance)

    def create_record(self, data: PayrollCreate) -> PayrollRecord:
        worker = require_found(self._workers.get_by_id(data.worker_id), "Worker not found")
        require_found(self._sites.get_by_id(data.site_id), "Site not found")
        if self._payroll.get_for_period(worker.id, data.site_id, data.pay_period_start):
            raise ConflictError("Payroll record already exists for this period")

        end = end_of_day(data.pay_period_end)
        breakdown = self._breakdown(worker, data.site_id, data.pay_period_start, end)
        record_id = self._store(
            worker, data.site_id, data.pay_period_start, end, data.pay_period_type, data.calculated_by, breakdown
        )
        return self.get_record(record_id)

    def update_record(self, record_id: int, data: PayrollUpdate) -> PayrollRecord:
        self.get_record(record_id)
        changes = data.changes()
        if changes:
            self._payroll.update(record_id, changes)
        return self.get_record(record_id)

    def delete_record(self, record_id: int) -> None:
        record = self.get_record(record_id)
        require(record.payment_status != PaymentStatus.PAID, "Cannot delete paid payroll record")
        self._payroll.delete(record_id)
