from datetime import date

from src.workforce_system.workforce_system.attendance.model import AttendanceRecord
from src.workforce_system.workforce_system.core.enums import AttendanceStatus
from src.workforce_system.workforce_system.payroll.calculator.standard_calculator import StandardPayrollCalculator


def _day(record_id, regular, overtime, status=AttendanceStatus.PRESENT):
    return AttendanceRecord(
        id=record_id,
        worker_id=1,
        site_id=1,
        attendance_date=date(2025, 1, record_id),
        regular_hours=regular,
        overtime_hours=overtime,
        status=status,
    )


def test_standard_calculator_pays_days_plus_overtime():
    records = [_day(1, 8.0, 0.0), _day(2, 8.0, 2.0, AttendanceStatus.OVERTIME), _day(3, 7.5, 0.0, AttendanceStatus.LATE)]

    pay = StandardPayrollCalculator().calculate(records, daily_rate=10000.0, overtime_multiplier=1.5)

    assert pay.total_days_worked == 3
    assert pay.total_regular_hours == 23.5
    assert pay.total_overtime_hours == 2.0
    assert pay.regular_pay == 30000.0
    assert pay.overtime_pay == 30000.0
    assert pay.gross_pay == 60000.0
    assert pay.deductions == 0.0
    assert pay.net_pay == pay.gross_pay
    assert pay.overtime_rate == 1.5


def test_standard_calculator_treats_missing_hours_as_zero():
    pay = StandardPayrollCalculator().calculate([_day(1, None, None)], daily_rate=4500.0, overtime_multiplier=2.0)

    assert pay.total_days_worked == 1
    assert pay.total_regular_hours == 0.0
    assert pay.overtime_pay == 0.0
    assert pay.gross_pay == 4500.0


def test_standard_calculator_empty_period_pays_nothing():
    pay = StandardPayrollCalculator().calculate([], daily_rate=10000.0, overtime_multiplier=1.5)

    assert pay.total_days_worked == 0
    assert pay.gross_pay == 0.0
    assert pay.net_pay == 0.0
