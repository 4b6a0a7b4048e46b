from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import WorkerStatus
from .model import Worker


class WorkerRepository(Protocol):
    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def get_by_national_id(self, national_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        status: Optional[WorkerStatus] = None,
        site_id: Optional[int] = None,
        job_type_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Worker]:
        raise NotImplementedError

    def list_active(self, *, site_id: Optional[int] = None) -> Sequence[Worker]:
        """All ACTIVE workers, optionally only those assigned to one site (payroll runs)."""

        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update(self, worker_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, worker_id: int) -> bool:
        raise NotImplementedError

    def count_attendance_records(self, worker_id: int) -> int:
        raise NotImplementedError

    def count_payroll_records(self, worker_id: int) -> int:
        raise NotImplementedError
