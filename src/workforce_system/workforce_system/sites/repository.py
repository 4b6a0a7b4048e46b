from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import SiteStatus
from .model import ConstructionSite, SiteJobRate


class SiteRepository(Protocol):
    def get_by_id(self, site_id: int) -> Optional[ConstructionSite]:
        raise NotImplementedError

    def get_by_code(self, site_code: str) -> Optional[ConstructionSite]:
        raise NotImplementedError

    def list(
        self,
        *,
        page: PageRequest,
        status: Optional[SiteStatus] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[ConstructionSite]:
        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update(self, site_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, site_id: int) -> bool:
        raise NotImplementedError

    def list_job_rates(self, site_id: int) -> Sequence[SiteJobRate]:
        raise NotImplementedError

    def get_job_rate(self, site_id: int, job_type_id: int) -> Optional[SiteJobRate]:
        raise NotImplementedError

    def create_job_rate(
        self,
        *,
        site_id: int,
        job_type_id: int,
        site_specific_rate: float,
        effective_date: datetime,
    ) -> int:
        raise NotImplementedError
