from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import at_hhmm
from ..core.constants import EARLY_DEPARTURE_RATIO
from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy, CheckoutContext
from .strategies.early_departure_strategy import EarlyDepartureStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-out status strategy.

    Precedence: early departure, then overtime, then late arrival. A late
    worker who stays past the standard day is therefore OVERTIME.
    """

    early_departure_ratio: float = EARLY_DEPARTURE_RATIO

    def is_late(self, ctx: CheckoutContext) -> bool:
        start = at_hhmm(ctx.check_in.date(), ctx.site.working_hours_start)
        return ctx.current == AttendanceStatus.PRESENT and ctx.check_in > start

    def is_early_departure(self, ctx: CheckoutContext) -> bool:
        end = at_hhmm(ctx.check_out.date(), ctx.site.working_hours_end)
        threshold = ctx.site.standard_hours_per_day * self.early_departure_ratio
        return ctx.check_out < end and ctx.hours.total < threshold

    def for_checkout(self, ctx: CheckoutContext) -> AttendanceStrategy:
        if self.is_early_departure(ctx):
            return EarlyDepartureStrategy()
        if ctx.hours.overtime > 0:
            return OvertimeStrategy()
        if self.is_late(ctx):
            return LateStrategy()
        return NormalStrategy()
