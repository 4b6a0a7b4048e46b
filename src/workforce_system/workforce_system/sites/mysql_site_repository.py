from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..common.refs import JOB_TYPE_REF_COLUMNS, job_type_ref
from ..core.enums import SiteStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    as_bool,
    as_float,
    db_cursor,
    fetch_count,
    fetchall,
    fetchone,
    insert_sql,
    search_clause,
    set_sql,
    where_sql,
)
from .model import ConstructionSite, SiteJobRate
from .repository import SiteRepository

_COLUMNS = (
    "site_code",
    "site_name",
    "province",
    "district",
    "sector",
    "cell",
    "village",
    "project_manager",
    "contact_phone",
    "start_date",
    "end_date",
    "working_hours_start",
    "working_hours_end",
    "standard_hours_per_day",
    "overtime_rate_multiplier",
    "status",
    "is_active",
)

_SELECT = """
    SELECT cs.*, (SELECT COUNT(*) FROM workers w WHERE w.assigned_site_id = cs.id) AS worker_count
    FROM construction_sites cs
"""


def _row_to_site(r: dict) -> ConstructionSite:
    return ConstructionSite(
        id=int(r["id"]),
        site_code=r["site_code"],
        site_name=r["site_name"],
        province=r["province"],
        district=r["district"],
        sector=r["sector"],
        cell=r["cell"],
        village=r["village"],
        project_manager=r.get("project_manager"),
        contact_phone=r.get("contact_phone"),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
        working_hours_start=r["working_hours_start"],
        working_hours_end=r["working_hours_end"],
        standard_hours_per_day=as_float(r["standard_hours_per_day"]),
        overtime_rate_multiplier=as_float(r["overtime_rate_multiplier"]),
        status=SiteStatus(r["status"]),
        is_active=as_bool(r.get("is_active")),
        worker_count=int(r.get("worker_count") or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _row_to_rate(r: dict) -> SiteJobRate:
    return SiteJobRate(
        id=int(r["id"]),
        site_id=int(r["site_id"]),
        job_type_id=int(r["job_type_id"]),
        site_specific_rate=as_float(r["site_specific_rate"]),
        effective_date=r.get("effective_date"),
        job_type=job_type_ref(r),
    )


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, site_id: int) -> Optional[ConstructionSite]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE cs.id=%s", (site_id,))
            r = fetchone(cur)
            return _row_to_site(r) if r else None

    def get_by_code(self, site_code: str) -> Optional[ConstructionSite]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE cs.site_code=%s", (site_code,))
            r = fetchone(cur)
            return _row_to_site(r) if r else None

    def list(
        self,
        *,
        page: PageRequest,
        status: Optional[SiteStatus] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[ConstructionSite]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("cs.status=%s")
            params.append(status.value)
        if is_active is not None:
            clauses.append("cs.is_active=%s")
            params.append(int(is_active))
        search_clause(search, ("cs.site_name", "cs.site_code", "cs.province", "cs.district"), clauses, params)
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM construction_sites cs {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY cs.created_at DESC, cs.id DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_site(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("construction_sites", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def update(self, site_id: int, changes: Mapping[str, Any]) -> bool:
        assignments, params = set_sql(changes, _COLUMNS)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE construction_sites SET {assignments} WHERE id=%s", (*params, site_id))
            return cur.rowcount > 0

    def delete(self, site_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM construction_sites WHERE id=%s", (site_id,))
            return cur.rowcount > 0

    def list_job_rates(self, site_id: int) -> Sequence[SiteJobRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.*, {JOB_TYPE_REF_COLUMNS}
                FROM site_job_rates r
                JOIN job_types j ON j.id = r.job_type_id
                WHERE r.site_id=%s
                ORDER BY j.job_name ASC
                """,
                (site_id,),
            )
            return [_row_to_rate(r) for r in fetchall(cur)]

    def get_job_rate(self, site_id: int, job_type_id: int) -> Optional[SiteJobRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.*, {JOB_TYPE_REF_COLUMNS}
                FROM site_job_rates r
                JOIN job_types j ON j.id = r.job_type_id
                WHERE r.site_id=%s AND r.job_type_id=%s
                """,
                (site_id, job_type_id),
            )
            r = fetchone(cur)
            return _row_to_rate(r) if r else None

    def create_job_rate(
        self,
        *,
        site_id: int,
        job_type_id: int,
        site_specific_rate: float,
        effective_date: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO site_job_rates (site_id, job_type_id, site_specific_rate, effective_date)
                VALUES (%s, %s, %s, %s)
                """,
                (site_id, job_type_id, site_specific_rate, effective_date),
            )
            return int(cur.lastrowid)
