from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..common.refs import JOB_TYPE_REF_COLUMNS, SITE_REF_COLUMNS, job_type_ref, site_ref
from ..core.enums import MobileMoneyProvider, PaymentMethod, WorkerStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetch_count,
    fetchall,
    fetchone,
    insert_sql,
    search_clause,
    set_sql,
    where_sql,
)
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = (
    "employee_id",
    "first_name",
    "last_name",
    "phone",
    "email",
    "national_id",
    "date_of_birth",
    "hire_date",
    "status",
    "assigned_site_id",
    "job_type_id",
    "bank_account",
    "bank_name",
    "mobile_money_provider",
    "mobile_money_number",
    "airtel_money_number",
    "preferred_payment_method",
    "emergency_contact_name",
    "emergency_contact_phone",
)

_SELECT = f"""
    SELECT wk.*, {SITE_REF_COLUMNS}, {JOB_TYPE_REF_COLUMNS}
    FROM workers wk
    LEFT JOIN construction_sites s ON s.id = wk.assigned_site_id
    LEFT JOIN job_types j ON j.id = wk.job_type_id
"""


def _row_to_worker(r: dict) -> Worker:
    return Worker(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        status=WorkerStatus(r["status"]),
        assigned_site_id=r.get("assigned_site_id"),
        job_type_id=r.get("job_type_id"),
        phone=r.get("phone"),
        email=r.get("email"),
        national_id=r.get("national_id"),
        date_of_birth=r.get("date_of_birth"),
        hire_date=r.get("hire_date"),
        bank_account=r.get("bank_account"),
        bank_name=r.get("bank_name"),
        mobile_money_provider=MobileMoneyProvider(r["mobile_money_provider"]) if r.get("mobile_money_provider") else None,
        mobile_money_number=r.get("mobile_money_number"),
        airtel_money_number=r.get("airtel_money_number"),
        preferred_payment_method=PaymentMethod(r["preferred_payment_method"]),
        emergency_contact_name=r.get("emergency_contact_name"),
        emergency_contact_phone=r.get("emergency_contact_phone"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        site=site_ref(r),
        job_type=job_type_ref(r),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_where(self, clause: str, value: object) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {clause}", (value,))
            r = fetchone(cur)
            return _row_to_worker(r) if r else None

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self._get_where("wk.id=%s", worker_id)

    def get_by_employee_id(self, employee_id: str) -> Optional[Worker]:
        return self._get_where("wk.employee_id=%s", employee_id)

    def get_by_national_id(self, national_id: str) -> Optional[Worker]:
        return self._get_where("wk.national_id=%s", national_id)

    def list(
        self,
        *,
        page: PageRequest,
        status: Optional[WorkerStatus] = None,
        site_id: Optional[int] = None,
        job_type_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Page[Worker]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("wk.status=%s")
            params.append(status.value)
        if site_id is not None:
            clauses.append("wk.assigned_site_id=%s")
            params.append(site_id)
        if job_type_id is not None:
            clauses.append("wk.job_type_id=%s")
            params.append(job_type_id)
        search_clause(
            search,
            ("wk.first_name", "wk.last_name", "wk.employee_id", "wk.phone", "wk.email"),
            clauses,
            params,
        )
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM workers wk {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY wk.created_at DESC, wk.id DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_worker(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def list_active(self, *, site_id: Optional[int] = None) -> Sequence[Worker]:
        clauses = ["wk.status=%s"]
        params: list[object] = [WorkerStatus.ACTIVE.value]
        if site_id is not None:
            clauses.append("wk.assigned_site_id=%s")
            params.append(site_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where_sql(clauses)} ORDER BY wk.id", tuple(params))
            return [_row_to_worker(r) for r in fetchall(cur)]

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("workers", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def update(self, worker_id: int, changes: Mapping[str, Any]) -> bool:
        assignments, params = set_sql(changes, _COLUMNS)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE workers SET {assignments} WHERE id=%s", (*params, worker_id))
            return cur.rowcount > 0

    def delete(self, worker_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE id=%s", (worker_id,))
            return cur.rowcount > 0

    def count_attendance_records(self, worker_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records WHERE worker_id=%s", (worker_id,))
            return fetch_count(cur)

    def count_payroll_records(self, worker_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM payroll_records WHERE worker_id=%s", (worker_id,))
            return fetch_count(cur)
