from __future__ import annotations

from typing import Optional

from pydantic import Field

from ..common.schemas import ApiModel, ListQuery
from ..common.validators import CODE_PATTERN
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER
from ..core.enums import JobTypeCategory


class JobTypeCreate(ApiModel):
    job_code: str = Field(min_length=1, max_length=20, pattern=CODE_PATTERN)
    job_name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[JobTypeCategory] = None
    base_daily_rate: float = Field(ge=0, le=1_000_000)
    overtime_multiplier: float = Field(DEFAULT_OVERTIME_MULTIPLIER, ge=1.0, le=5.0)
    is_active: bool = True


class JobTypeUpdate(ApiModel):
    job_code: Optional[str] = Field(None, min_length=1, max_length=20, pattern=CODE_PATTERN)
    job_name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[JobTypeCategory] = None
    base_daily_rate: Optional[float] = Field(None, ge=0, le=1_000_000)
    overtime_multiplier: Optional[float] = Field(None, ge=1.0, le=5.0)
    is_active: Optional[bool] = None


class JobTypeListQuery(ListQuery):
    category: Optional[JobTypeCategory] = None
    is_active: Optional[bool] = None
