from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_day(self, worker_id: int, site_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        worker_id: Optional[int] = None,
        site_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        search: Optional[str] = None,
        manual_only: bool = False,
        entry_type: Optional[str] = None,
    ) -> Page[AttendanceRecord]:
        """``entry_type`` narrows manual listings: 'check-in' (open) or 'check-out' (closed)."""

        raise NotImplementedError

    def count_by_status(
        self,
        *,
        manual_only: bool = False,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, int]:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        worker_id: int,
        start: date,
        end: date,
        site_id: Optional[int] = None,
        statuses: Optional[Sequence[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update(self, record_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError
