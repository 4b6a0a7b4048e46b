"""Small read-models embedded in API responses (relational includes)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class WorkerRef:
    id: int
    employee_id: str
    first_name: str
    last_name: str
    status: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class SiteRef:
    id: int
    site_code: str
    site_name: str


@dataclass(frozen=True)
class JobTypeRef:
    id: int
    job_code: str
    job_name: str
    category: Optional[str] = None


def worker_ref(row: Mapping[str, Any], prefix: str = "w_") -> Optional[WorkerRef]:
    if row.get(f"{prefix}id") is None:
        return None
    return WorkerRef(
        id=int(row[f"{prefix}id"]),
        employee_id=row[f"{prefix}employee_id"],
        first_name=row[f"{prefix}first_name"],
        last_name=row[f"{prefix}last_name"],
        status=row.get(f"{prefix}status"),
    )


def site_ref(row: Mapping[str, Any], prefix: str = "s_") -> Optional[SiteRef]:
    if row.get(f"{prefix}id") is None:
        return None
    return SiteRef(id=int(row[f"{prefix}id"]), site_code=row[f"{prefix}site_code"], site_name=row[f"{prefix}site_name"])


def job_type_ref(row: Mapping[str, Any], prefix: str = "j_") -> Optional[JobTypeRef]:
    if row.get(f"{prefix}id") is None:
        return None
    return JobTypeRef(
        id=int(row[f"{prefix}id"]),
        job_code=row[f"{prefix}job_code"],
        job_name=row[f"{prefix}job_name"],
        category=row.get(f"{prefix}category"),
    )


# SELECT fragments matching the prefixes above.
WORKER_REF_COLUMNS = "w.id AS w_id, w.employee_id AS w_employee_id, w.first_name AS w_first_name, w.last_name AS w_last_name, w.status AS w_status"
SITE_REF_COLUMNS = "s.id AS s_id, s.site_code AS s_site_code, s.site_name AS s_site_name"
JOB_TYPE_REF_COLUMNS = "j.id AS j_id, j.job_code AS j_job_code, j.job_name AS j_job_name, j.category AS j_category"
