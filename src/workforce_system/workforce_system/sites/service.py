from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import now_local
from ..common.pagination import Page
from ..common.validators import require, require_found
from ..core.exceptions import ConflictError
from ..job_types.repository import JobTypeRepository
from .model import ConstructionSite, SiteJobRate
from .repository import SiteRepository
from .schemas import SiteCreate, SiteJobRateCreate, SiteListQuery, SiteUpdate


class SiteService:
    def __init__(self, sites: SiteRepository, job_types: JobTypeRepository):
        self._sites = sites
        self._job_types = job_types

    def list_sites(self, query: SiteListQuery) -> Page[ConstructionSite]:
        return self._sites.list(
            page=query.page_request(),
            status=query.status,
            is_active=query.is_active,
            search=query.search,
        )

    def get_site(self, site_id: int) -> ConstructionSite:
        return require_found(self._sites.get_by_id(site_id), "Construction site not found")

    def create_site(self, data: SiteCreate) -> ConstructionSite:
        if self._sites.get_by_code(data.site_code):
            raise ConflictError("Site code already exists")
        new_id = self._sites.create(data.model_dump())
        return self.get_site(new_id)

    def update_site(self, site_id: int, data: SiteUpdate) -> ConstructionSite:
        current = self.get_site(site_id)
        changes = data.changes()
        code = changes.get("site_code")
        if code and code != current.site_code and self._sites.get_by_code(code):
            raise ConflictError("Site code already exists")
        if changes:
            self._sites.update(site_id, changes)
        return self.get_site(site_id)

    def delete_site(self, site_id: int) -> None:
        current = self.get_site(site_id)
        require(current.worker_count == 0, "Cannot delete site with assigned workers")
        self._sites.delete(site_id)

    def list_job_rates(self, site_id: int) -> Sequence[SiteJobRate]:
        self.get_site(site_id)
        return self._sites.list_job_rates(site_id)

    def add_job_rate(self, site_id: int, data: SiteJobRateCreate, *, now: datetime | None = None) -> SiteJobRate:
        self.get_site(site_id)
        require_found(self._job_types.get_by_id(data.job_type_id), "Job type not found")
        if self._sites.get_job_rate(site_id, data.job_type_id):
            raise ConflictError("Job rate already exists for this site and job type")

        self._sites.create_job_rate(
            site_id=site_id,
            job_type_id=data.job_type_id,
            site_specific_rate=data.site_specific_rate,
            effective_date=data.effective_date or now or now_local(),
        )
        return self._sites.get_job_rate(site_id, data.job_type_id)
