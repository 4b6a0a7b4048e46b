from __future__ import annotations

from datetime import date, datetime

import pydantic
import pytest

from src.workforce_system.workforce_system.core.enums import (
    AttendanceStatus,
    PaymentMethod,
    PaymentStatus,
    PayPeriodType,
)
from src.workforce_system.workforce_system.core.exceptions import ConflictError, ValidationError
from src.workforce_system.workforce_system.payroll.schemas import (
    PayrollCalculateRequest,
    PayrollCreate,
    PayrollListQuery,
    PayrollProcessRequest,
)

MARCH = dict(
    pay_period_start=datetime(2025, 3, 1),
    pay_period_end=datetime(2025, 3, 31),
    pay_period_type=PayPeriodType.MONTHLY,
)


@pytest.fixture
def service(world):
    # Jean (site 1, mason at 10000/day): two payable days, one with an hour of overtime,
    # plus an early departure that is not paid.
    world.add_closed_day(1, 1, date(2025, 3, 3), regular=8.0, overtime=0.0, status=AttendanceStatus.PRESENT)
    world.add_closed_day(1, 1, date(2025, 3, 4), regular=8.0, overtime=1.0, status=AttendanceStatus.OVERTIME)
    world.add_closed_day(1, 1, date(2025, 3, 5), regular=3.0, overtime=0.0, status=AttendanceStatus.EARLY_DEPARTURE)
    # Alice (site 2, helper at the site rate of 6000/day): one day at home, one elsewhere, one in April.
    world.add_closed_day(2, 2, date(2025, 3, 3), regular=8.0, overtime=0.0, status=AttendanceStatus.LATE)
    world.add_closed_day(2, 1, date(2025, 3, 4), regular=8.0, overtime=0.0, status=AttendanceStatus.PRESENT)
    world.add_closed_day(2, 2, date(2025, 4, 1), regular=8.0, overtime=0.0, status=AttendanceStatus.PRESENT)
    return world.container().payroll_service


def test_calculate_pays_every_active_worker(service, world):
    report = service.calculate(PayrollCalculateRequest(**MARCH))

    assert report.errors == []
    by_worker = {r["workerId"]: r for r in report.results}
    assert set(by_worker) == {1, 2}
    assert by_worker[1]["totalDaysWorked"] == 2
    assert by_worker[1]["regularPay"] == 20000.0
    assert by_worker[1]["overtimePay"] == 15000.0
    assert by_worker[1]["grossPay"] == 35000.0
    assert by_worker[2]["grossPay"] == 6000.0
    assert report.summary["totalWorkers"] == 2
    assert report.summary["totalGrossPay"] == 41000.0
    assert report.summary["payPeriod"] == "2025-03-01 to 2025-03-31"
    assert report.message == "Payroll calculation completed. 2 successful, 0 failed."


def test_calculate_uses_site_rate_override(service, world):
    report = service.calculate(PayrollCalculateRequest(site_id=2, **MARCH))

    (result,) = report.results
    stored = world.payroll.get_by_id(result["payrollRecordId"])
    assert stored.daily_rate == 6000.0
    assert stored.payment_status == PaymentStatus.CALCULATED
    assert stored.calculated_by == "SYSTEM"
    assert stored.pay_period_end == datetime(2025, 3, 31, 23, 59, 59)


def test_calculate_skips_workers_already_paid_for_period(service, world):
    service.calculate(PayrollCalculateRequest(**MARCH))

    report = service.calculate(PayrollCalculateRequest(**MARCH))

    assert report.results == []
    assert {e["error"] for e in report.errors} == {"Payroll record already exists for this period"}
    assert report.summary["failedCalculations"] == 2
    assert len(world.payroll.rows) == 2


def test_process_continues_past_a_failed_payment(service, world):
    first = world.add_payroll(1, 35000.0)
    second = world.add_payroll(2, 6000.0)
    paid = world.add_payroll(1, 100.0, status=PaymentStatus.PAID)
    world.payroll.failing_ids.add(second)
    paid_at = datetime(2025, 4, 2, 10, 0)

    report = service.process(
        PayrollProcessRequest(payroll_record_ids=[first, second, paid, 999], payment_method=PaymentMethod.MOBILE_MONEY),
        now=paid_at,
    )

    assert report.summary["totalRecords"] == 2
    assert report.summary["successfulPayments"] == 1
    assert report.summary["failedPayments"] == 1
    assert report.summary["totalAmount"] == 35000.0
    assert report.errors == [{"payrollRecordId": second, "workerName": "Alice Uwase", "error": "payment gateway unavailable"}]
    record = world.payroll.get_by_id(first)
    assert record.payment_status == PaymentStatus.PAID
    assert record.payment_date == paid_at
    assert record.payment_reference.startswith(f"PAY-{first}-")
    assert world.payroll.get_by_id(second).payment_status == PaymentStatus.CALCULATED


def test_process_without_payable_records_fails(service, world):
    paid = world.add_payroll(1, 100.0, status=PaymentStatus.PAID)

    with pytest.raises(ValidationError, match="No valid payroll records found"):
        service.process(PayrollProcessRequest(payroll_record_ids=[paid], payment_method=PaymentMethod.CASH))


def test_create_record_and_reject_duplicate(service, world):
    record = service.create_record(PayrollCreate(worker_id=2, site_id=2, **MARCH))

    assert record.total_days_worked == 1
    assert record.net_pay == 6000.0
    with pytest.raises(ConflictError):
        service.create_record(PayrollCreate(worker_id=2, site_id=2, **MARCH))


def test_detail_lists_all_attendance_in_period(service, world):
    record = service.create_record(PayrollCreate(worker_id=1, site_id=1, **MARCH))

    detail = service.get_detail(record.id)

    assert [a.attendance_date for a in detail.attendance_records] == [
        date(2025, 3, 3),
        date(2025, 3, 4),
        date(2025, 3, 5),
    ]


def test_paid_record_cannot_be_deleted(service, world):
    paid = world.add_payroll(1, 100.0, status=PaymentStatus.PAID)
    open_record = world.add_payroll(2, 6000.0)

    with pytest.raises(ValidationError, match="Cannot delete paid payroll record"):
        service.delete_record(paid)
    service.delete_record(open_record)
    assert world.payroll.get_by_id(open_record) is None


def test_listing_summarises_totals_and_statuses(service, world):
    world.add_payroll(1, 35000.0)
    world.add_payroll(2, 6000.0, status=PaymentStatus.PAID)

    page, summary = service.list_records(PayrollListQuery.model_validate({"status": "PAID"}))

    assert page.total == 1
    assert summary["totalNetPay"] == 6000.0
    assert summary["totalRecords"] == 1
    assert {row["status"] for row in summary["statusBreakdown"]} == {"CALCULATED", "PAID"}


def test_pay_period_must_not_end_before_it_starts():
    with pytest.raises(pydantic.ValidationError, match="payPeriodEnd must not be before payPeriodStart"):
        PayrollCalculateRequest(
            pay_period_start=datetime(2025, 3, 31),
            pay_period_end=datetime(2025, 3, 1),
            pay_period_type=PayPeriodType.MONTHLY,
        )
