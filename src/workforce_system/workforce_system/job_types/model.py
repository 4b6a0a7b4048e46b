from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.serialization import to_json
from ..core.enums import JobTypeCategory


@dataclass(frozen=True)
class JobType:
    """A trade with its base daily pay and overtime multiplier."""

    id: int
    job_code: str
    job_name: str
    description: Optional[str]
    category: Optional[JobTypeCategory]
    base_daily_rate: float
    overtime_multiplier: float
    is_active: bool = True
    worker_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_payload(self) -> dict:
        payload = to_json(self)
        payload["workers"] = payload.pop("workerCount")
        return payload
