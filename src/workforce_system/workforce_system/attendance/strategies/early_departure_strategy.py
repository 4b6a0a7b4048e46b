from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, CheckoutContext, StatusDecision


class EarlyDepartureStrategy(AttendanceStrategy):
    """Left before the site's end time having worked under half a standard day."""

    def decide_checkout(self, ctx: CheckoutContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY_DEPARTURE)
