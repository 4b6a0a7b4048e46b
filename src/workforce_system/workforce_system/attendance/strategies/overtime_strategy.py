from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckoutContext, StatusDecision


class OvertimeStrategy(AttendanceStrategy):
    def decide_checkout(self, ctx: CheckoutContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.OVERTIME)
