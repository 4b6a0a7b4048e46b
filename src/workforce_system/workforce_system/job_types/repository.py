from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.pagination import Page, PageRequest
from ..core.enums import JobTypeCategory
from .model import JobType


class JobTypeRepository(Protocol):
    def get_by_id(self, job_type_id: int) -> Optional[JobType]:
        raise NotImplementedError

    def get_by_code(self, job_code: str) -> Optional[JobType]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        category: Optional[JobTypeCategory] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[JobType]:
        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update(self, job_type_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, job_type_id: int) -> bool:
        raise NotImplementedError
