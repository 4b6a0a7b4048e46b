from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.refs import JobTypeRef, SiteRef
from ..core.enums import MobileMoneyProvider, PaymentMethod, WorkerStatus


@dataclass(frozen=True)
class Worker:
    """A construction worker, their site assignment and payout details."""

    id: int
    employee_id: str
    first_name: str
    last_name: str
    status: WorkerStatus = WorkerStatus.ACTIVE
    assigned_site_id: Optional[int] = None
    job_type_id: Optional[int] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    national_id: Optional[str] = None
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None
    mobile_money_provider: Optional[MobileMoneyProvider] = None
    mobile_money_number: Optional[str] = None
    airtel_money_number: Optional[str] = None
    preferred_payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    site: Optional[SiteRef] = None
    job_type: Optional[JobTypeRef] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == WorkerStatus.ACTIVE
