from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.refs import JobTypeRef
from ..common.serialization import to_json
from ..core.constants import DEFAULT_STANDARD_HOURS, DEFAULT_WORKING_HOURS_END, DEFAULT_WORKING_HOURS_START
from ..core.enums import SiteStatus


@dataclass(frozen=True)
class ConstructionSite:
    """A construction site and its working-hours policy."""

    id: int
    site_code: str
    site_name: str
    province: str
    district: str
    sector: str
    cell: str
    village: str
    project_manager: Optional[str] = None
    contact_phone: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    working_hours_start: str = DEFAULT_WORKING_HOURS_START
    working_hours_end: str = DEFAULT_WORKING_HOURS_END
    standard_hours_per_day: float = DEFAULT_STANDARD_HOURS
    overtime_rate_multiplier: float = 1.5
    status: SiteStatus = SiteStatus.ACTIVE
    is_active: bool = True
    worker_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def location(self) -> str:
        return ", ".join([self.village, self.cell, self.sector, self.district, self.province])

    def to_payload(self) -> dict:
        payload = to_json(self)
        payload["workers"] = payload.pop("workerCount")
        payload["location"] = self.location
        return payload


@dataclass(frozen=True)
class SiteJobRate:
    """Per-site override of a job type's daily rate."""

    id: int
    site_id: int
    job_type_id: int
    site_specific_rate: float
    effective_date: Optional[datetime] = None
    job_type: Optional[JobTypeRef] = None
