from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.pagination import Page, PageRequest
from ..core.enums import JobTypeCategory
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
from .model import JobType
from .repository import JobTypeRepository

_COLUMNS = (
    "job_code",
    "job_name",
    "description",
    "category",
    "base_daily_rate",
    "overtime_multiplier",
    "is_active",
)

_SELECT = """
    SELECT jt.*, (SELECT COUNT(*) FROM workers w WHERE w.job_type_id = jt.id) AS worker_count
    FROM job_types jt
"""


def _row_to_job_type(r: dict) -> JobType:
    return JobType(
        id=int(r["id"]),
        job_code=r["job_code"],
        job_name=r["job_name"],
        description=r.get("description"),
        category=JobTypeCategory(r["category"]) if r.get("category") else None,
        base_daily_rate=as_float(r["base_daily_rate"]) or 0.0,
        overtime_multiplier=as_float(r["overtime_multiplier"]) or 1.0,
        is_active=as_bool(r.get("is_active")),
        worker_count=int(r.get("worker_count") or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLJobTypeRepository(JobTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, job_type_id: int) -> Optional[JobType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE jt.id=%s", (job_type_id,))
            r = fetchone(cur)
            return _row_to_job_type(r) if r else None

    def get_by_code(self, job_code: str) -> Optional[JobType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE jt.job_code=%s", (job_code,))
            r = fetchone(cur)
            return _row_to_job_type(r) if r else None

    def list(
        self,
        *,
        page: PageRequest,
        category: Optional[JobTypeCategory] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[JobType]:
        clauses: list[str] = []
        params: list[object] = []
        if category is not None:
            clauses.append("jt.category=%s")
            params.append(category.value)
        if is_active is not None:
            clauses.append("jt.is_active=%s")
            params.append(int(is_active))
        search_clause(search, ("jt.job_name", "jt.job_code", "jt.description"), clauses, params)
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM job_types jt {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY jt.id DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_job_type(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("job_types", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def update(self, job_type_id: int, changes: Mapping[str, Any]) -> bool:
        assignments, params = set_sql(changes, _COLUMNS)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE job_types SET {assignments} WHERE id=%s", (*params, job_type_id))
            return cur.rowcount > 0

    def delete(self, job_type_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM job_types WHERE id=%s", (job_type_id,))
            return cur.rowcount > 0
