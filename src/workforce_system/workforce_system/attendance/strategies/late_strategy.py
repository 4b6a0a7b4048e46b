from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckoutContext, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkout(self, ctx: CheckoutContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
