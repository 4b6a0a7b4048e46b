from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..common.refs import SITE_REF_COLUMNS, WORKER_REF_COLUMNS, site_ref, worker_ref
from ..core.enums import PaymentMethod, PaymentStatus, PayPeriodType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
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
from .model import PayrollRecord
from .repository import PayrollRepository

_COLUMNS = (
    "worker_id",
    "site_id",
    "pay_period_start",
    "pay_period_end",
    "pay_period_type",
    "total_days_worked",
    "total_regular_hours",
    "total_overtime_hours",
    "daily_rate",
    "overtime_rate",
    "regular_pay",
    "overtime_pay",
    "gross_pay",
    "deductions",
    "net_pay",
    "payment_status",
    "payment_method",
    "payment_date",
    "payment_reference",
    "calculated_by",
    "approved_by",
    "approved_at",
)

_FROM = """
    FROM payroll_records pr
    JOIN workers w ON w.id = pr.worker_id
    JOIN construction_sites s ON s.id = pr.site_id
"""

_SELECT = f"SELECT pr.*, {WORKER_REF_COLUMNS}, {SITE_REF_COLUMNS} {_FROM}"


def _row_to_record(r: dict) -> PayrollRecord:
    method = r.get("payment_method")
    return PayrollRecord(
        id=int(r["id"]),
        worker_id=int(r["worker_id"]),
        site_id=int(r["site_id"]),
        pay_period_start=r["pay_period_start"],
        pay_period_end=r["pay_period_end"],
        pay_period_type=PayPeriodType(r["pay_period_type"]),
        total_days_worked=int(r.get("total_days_worked") or 0),
        total_regular_hours=as_float(r.get("total_regular_hours")) or 0.0,
        total_overtime_hours=as_float(r.get("total_overtime_hours")) or 0.0,
        daily_rate=as_float(r.get("daily_rate")) or 0.0,
        overtime_rate=as_float(r.get("overtime_rate")) or 0.0,
        regular_pay=as_float(r.get("regular_pay")) or 0.0,
        overtime_pay=as_float(r.get("overtime_pay")) or 0.0,
        gross_pay=as_float(r.get("gross_pay")) or 0.0,
        deductions=as_float(r.get("deductions")) or 0.0,
        net_pay=as_float(r.get("net_pay")) or 0.0,
        payment_status=PaymentStatus(r["payment_status"]),
        payment_method=PaymentMethod(method) if method else None,
        payment_date=r.get("payment_date"),
        payment_reference=r.get("payment_reference"),
        calculated_by=r.get("calculated_by"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        worker=worker_ref(r),
        site=site_ref(r),
    )


def _filter_clauses(
    *,
    site_id: Optional[int],
    worker_id: Optional[int],
    payment_status: Optional[PaymentStatus],
    pay_period_type: Optional[PayPeriodType],
    date_from: Optional[date],
    date_to: Optional[date],
) -> tuple[list[str], list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if site_id is not None:
        clauses.append("pr.site_id=%s")
        params.append(site_id)
    if worker_id is not None:
        clauses.append("pr.worker_id=%s")
        params.append(worker_id)
    if payment_status is not None:
        clauses.append("pr.payment_status=%s")
        params.append(payment_status.value)
    if pay_period_type is not None:
        clauses.append("pr.pay_period_type=%s")
        params.append(pay_period_type.value)
    if date_from is not None:
        clauses.append("pr.pay_period_start >= %s")
        params.append(date_from)
    if date_to is not None:
        clauses.append("pr.pay_period_start < %s")
        params.append(date_to + timedelta(days=1))
    return clauses, params


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE pr.id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_period(self, worker_id: int, site_id: int, pay_period_start: datetime) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE pr.worker_id=%s AND pr.site_id=%s AND pr.pay_period_start=%s",
                (worker_id, site_id, pay_period_start),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list(
        self,
        *,
        page: PageRequest,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
        pay_period_type: Optional[PayPeriodType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        search: Optional[str] = None,
    ) -> Page[PayrollRecord]:
        clauses, params = _filter_clauses(
            site_id=site_id,
            worker_id=worker_id,
            payment_status=payment_status,
            pay_period_type=pay_period_type,
            date_from=date_from,
            date_to=date_to,
        )
        search_clause(search, ("w.first_name", "w.last_name", "w.employee_id"), clauses, params)
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total {_FROM} {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY pr.pay_period_start DESC, pr.id DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_record(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def totals(
        self,
        *,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
        pay_period_type: Optional[PayPeriodType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, float]:
        clauses, params = _filter_clauses(
            site_id=site_id,
            worker_id=worker_id,
            payment_status=payment_status,
            pay_period_type=pay_period_type,
            date_from=date_from,
            date_to=date_to,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COALESCE(SUM(pr.gross_pay), 0) AS gross_pay, COALESCE(SUM(pr.net_pay), 0) AS net_pay "
                f"FROM payroll_records pr {where_sql(clauses)}",
                tuple(params),
            )
            r = fetchone(cur) or {}
        return {"gross_pay": as_float(r.get("gross_pay")) or 0.0, "net_pay": as_float(r.get("net_pay")) or 0.0}

    def status_breakdown(self) -> List[Dict[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT payment_status, COUNT(*) AS total, COALESCE(SUM(net_pay), 0) AS amount "
                "FROM payroll_records GROUP BY payment_status"
            )
            return [
                {"status": r["payment_status"], "count": int(r["total"]), "totalAmount": as_float(r["amount"]) or 0.0}
                for r in fetchall(cur)
            ]

    def list_payable(self, record_ids: Sequence[int]) -> Sequence[PayrollRecord]:
        if not record_ids:
            return []
        placeholders = ", ".join(["%s"] * len(record_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE pr.id IN ({placeholders}) AND pr.payment_status IN (%s, %s) ORDER BY pr.id",
                (*record_ids, PaymentStatus.CALCULATED.value, PaymentStatus.APPROVED.value),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("payroll_records", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def update(self, record_id: int, changes: Mapping[str, Any]) -> bool:
        assignments, params = set_sql(changes, _COLUMNS)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE payroll_records SET {assignments} WHERE id=%s", (*params, record_id))
            return cur.rowcount > 0

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
