from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ..model import PayBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        records: Sequence[AttendanceRecord],
        *,
        daily_rate: float,
        overtime_multiplier: float,
    ) -> PayBreakdown:
        raise NotImplementedError
