from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field

from ..common.schemas import ApiModel, ListQuery, LocalDateTime, PositiveId
from ..common.validators import CODE_PATTERN, HHMM_PATTERN
from ..core.constants import (
    DEFAULT_OVERTIME_MULTIPLIER,
    DEFAULT_STANDARD_HOURS,
    DEFAULT_WORKING_HOURS_END,
    DEFAULT_WORKING_HOURS_START,
)
from ..core.enums import SiteStatus


class SiteCreate(ApiModel):
    site_code: str = Field(min_length=1, max_length=20, pattern=CODE_PATTERN)
    site_name: str = Field(min_length=1, max_length=200)
    province: str = Field(min_length=1, max_length=100)
    district: str = Field(min_length=1, max_length=100)
    sector: str = Field(min_length=1, max_length=100)
    cell: str = Field(min_length=1, max_length=100)
    village: str = Field(min_length=1, max_length=100)
    project_manager: Optional[str] = Field(None, max_length=100)
    contact_phone: Optional[str] = Field(None, max_length=20)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    working_hours_start: str = Field(DEFAULT_WORKING_HOURS_START, pattern=HHMM_PATTERN)
    working_hours_end: str = Field(DEFAULT_WORKING_HOURS_END, pattern=HHMM_PATTERN)
    standard_hours_per_day: float = Field(DEFAULT_STANDARD_HOURS, ge=0.1, le=24)
    overtime_rate_multiplier: float = Field(DEFAULT_OVERTIME_MULTIPLIER, ge=1.0, le=5.0)
    status: SiteStatus = SiteStatus.ACTIVE
    is_active: bool = True


class SiteUpdate(ApiModel):
    site_code: Optional[str] = Field(None, min_length=1, max_length=20, pattern=CODE_PATTERN)
    site_name: Optional[str] = Field(None, min_length=1, max_length=200)
    province: Optional[str] = Field(None, min_length=1, max_length=100)
    district: Optional[str] = Field(None, min_length=1, max_length=100)
    sector: Optional[str] = Field(None, min_length=1, max_length=100)
    cell: Optional[str] = Field(None, min_length=1, max_length=100)
    village: Optional[str] = Field(None, min_length=1, max_length=100)
    project_manager: Optional[str] = Field(None, max_length=100)
    contact_phone: Optional[str] = Field(None, max_length=20)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    working_hours_start: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    working_hours_end: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    standard_hours_per_day: Optional[float] = Field(None, ge=0.1, le=24)
    overtime_rate_multiplier: Optional[float] = Field(None, ge=1.0, le=5.0)
    status: Optional[SiteStatus] = None
    is_active: Optional[bool] = None


class SiteListQuery(ListQuery):
    status: Optional[SiteStatus] = None
    is_active: Optional[bool] = None


class SiteJobRateCreate(ApiModel):
    job_type_id: PositiveId
    site_specific_rate: float = Field(gt=0)
    effective_date: Optional[LocalDateTime] = None
