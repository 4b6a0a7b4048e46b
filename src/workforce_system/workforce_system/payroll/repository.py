from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import PaymentStatus, PayPeriodType
from .model import PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, worker_id: int, site_id: int, pay_period_start: datetime) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
        pay_period_type: Optional[PayPeriodType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        search: Optional[str] = None,
    ) -> Page[PayrollRecord]:
        raise NotImplementedError

    def totals(
        self,
        *,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
        pay_period_type: Optional[PayPeriodType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, float]:
        """Sums of gross and net pay: ``{"gross_pay": ..., "net_pay": ...}``."""

        raise NotImplementedError

    def status_breakdown(self) -> List[Dict[str, Any]]:
        """Per-status record count and net pay total."""

        raise NotImplementedError

    def list_payable(self, record_ids: Sequence[int]) -> Sequence[PayrollRecord]:
        """Records among ``record_ids`` that are CALCULATED or APPROVED."""

        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update(self, record_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError
