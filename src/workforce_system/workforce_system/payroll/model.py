from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.refs import SiteRef, WorkerRef
from ..core.enums import PaymentMethod, PaymentStatus, PayPeriodType


@dataclass(frozen=True)
class PayrollRecord:
    """One worker's pay for one site over one pay period."""

    id: int
    worker_id: int
    site_id: int
    pay_period_start: datetime
    pay_period_end: datetime
    pay_period_type: PayPeriodType
    total_days_worked: int = 0
    total_regular_hours: float = 0.0
    total_overtime_hours: float = 0.0
    daily_rate: float = 0.0
    overtime_rate: float = 1.5
    regular_pay: float = 0.0
    overtime_pay: float = 0.0
    gross_pay: float = 0.0
    deductions: float = 0.0
    net_pay: float = 0.0
    payment_status: PaymentStatus = PaymentStatus.CALCULATED
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[datetime] = None
    payment_reference: Optional[str] = None
    calculated_by: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    worker: Optional[WorkerRef] = None
    site: Optional[SiteRef] = None

    @property
    def is_payable(self) -> bool:
        return self.payment_status in (PaymentStatus.CALCULATED, PaymentStatus.APPROVED)


@dataclass(frozen=True)
class PayBreakdown:
    """Result of applying a pay rule to a period's attendance."""

    total_days_worked: int
    total_regular_hours: float
    total_overtime_hours: float
    daily_rate: float
    overtime_rate: float
    regular_pay: float
    overtime_pay: float
    gross_pay: float
    deductions: float
    net_pay: float
