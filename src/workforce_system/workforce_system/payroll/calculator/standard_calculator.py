from __future__ import annotations

from typing import Sequence

from ...attendance.model import AttendanceRecord
from ..model import PayBreakdown
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: a day's rate per worked day, overtime hours at rate x multiplier, no deductions."""

    def calculate(
        self,
        records: Sequence[AttendanceRecord],
        *,
        daily_rate: float,
        overtime_multiplier: float,
    ) -> PayBreakdown:
        days = len(records)
        regular_hours = sum(float(r.regular_hours or 0) for r in records)
        overtime_hours = sum(float(r.overtime_hours or 0) for r in records)

        regular_pay = days * daily_rate
        overtime_pay = overtime_hours * daily_rate * overtime_multiplier
        gross = round(regular_pay + overtime_pay, 2)
        return PayBreakdown(
            total_days_worked=days,
            total_regular_hours=round(regular_hours, 2),
            total_overtime_hours=round(overtime_hours, 2),
            daily_rate=daily_rate,
            overtime_rate=overtime_multiplier,
            regular_pay=round(regular_pay, 2),
            overtime_pay=round(overtime_pay, 2),
            gross_pay=gross,
            deductions=0.0,
            net_pay=gross,
        )
