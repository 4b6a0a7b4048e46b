from __future__ import annotations

from .base import AttendanceStrategy, CheckoutContext, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time, full-length day: keep whatever status check-in recorded."""

    def decide_checkout(self, ctx: CheckoutContext) -> StatusDecision:
        return StatusDecision(status=ctx.current)
