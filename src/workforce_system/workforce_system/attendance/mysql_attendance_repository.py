from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..common.refs import SITE_REF_COLUMNS, WORKER_REF_COLUMNS, site_ref, worker_ref
from ..core.enums import AttendanceStatus, CheckOutMethod
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
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "worker_id",
    "site_id",
    "attendance_date",
    "check_in_time",
    "check_out_time",
    "total_hours",
    "regular_hours",
    "overtime_hours",
    "break_time_minutes",
    "status",
    "check_out_method",
    "fingerprint_verified",
    "notes",
)

_FROM = """
    FROM attendance_records ar
    JOIN workers w ON w.id = ar.worker_id
    JOIN construction_sites s ON s.id = ar.site_id
"""

_SELECT = f"SELECT ar.*, {WORKER_REF_COLUMNS}, {SITE_REF_COLUMNS} {_FROM}"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        worker_id=int(r["worker_id"]),
        site_id=int(r["site_id"]),
        attendance_date=r["attendance_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        total_hours=as_float(r.get("total_hours")),
        regular_hours=as_float(r.get("regular_hours")),
        overtime_hours=as_float(r.get("overtime_hours")),
        break_time_minutes=int(r.get("break_time_minutes") or 0),
        status=AttendanceStatus(r["status"]),
        check_out_method=CheckOutMethod(r["check_out_method"]),
        fingerprint_verified=as_bool(r.get("fingerprint_verified")),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        worker=worker_ref(r),
        site=site_ref(r),
    )


def _manual_clauses(clauses: list[str], params: list[object]) -> None:
    clauses.append("ar.check_out_method=%s AND ar.fingerprint_verified=0")
    params.append(CheckOutMethod.MANUAL.value)


def _date_clauses(date_from: Optional[date], date_to: Optional[date], clauses: list[str], params: list[object]) -> None:
    if date_from is not None:
        clauses.append("ar.attendance_date >= %s")
        params.append(date_from)
    if date_to is not None:
        clauses.append("ar.attendance_date <= %s")
        params.append(date_to)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE ar.id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_day(self, worker_id: int, site_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE ar.worker_id=%s AND ar.site_id=%s AND ar.attendance_date=%s",
                (worker_id, site_id, attendance_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list(
        self,
        *,
        page: PageRequest,
        worker_id: Optional[int] = None,
        site_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        search: Optional[str] = None,
        manual_only: bool = False,
        entry_type: Optional[str] = None,
    ) -> Page[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if manual_only:
            _manual_clauses(clauses, params)
        if entry_type == "check-in":
            clauses.append("ar.check_in_time IS NOT NULL AND ar.check_out_time IS NULL")
        elif entry_type == "check-out":
            clauses.append("ar.check_out_time IS NOT NULL")
        if worker_id is not None:
            clauses.append("ar.worker_id=%s")
            params.append(worker_id)
        if site_id is not None:
            clauses.append("ar.site_id=%s")
            params.append(site_id)
        if status is not None:
            clauses.append("ar.status=%s")
            params.append(status.value)
        _date_clauses(date_from, date_to, clauses, params)
        search_clause(search, ("w.first_name", "w.last_name", "w.employee_id", "s.site_name"), clauses, params)
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total {_FROM} {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY ar.attendance_date DESC, ar.check_in_time DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_record(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def count_by_status(
        self,
        *,
        manual_only: bool = False,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, int]:
        clauses: list[str] = []
        params: list[object] = []
        if manual_only:
            _manual_clauses(clauses, params)
        _date_clauses(date_from, date_to, clauses, params)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT ar.status, COUNT(*) AS total FROM attendance_records ar {where_sql(clauses)} GROUP BY ar.status",
                tuple(params),
            )
            return {r["status"]: int(r["total"]) for r in fetchall(cur)}

    def list_for_period(
        self,
        *,
        worker_id: int,
        start: date,
        end: date,
        site_id: Optional[int] = None,
        statuses: Optional[Sequence[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["ar.worker_id=%s", "ar.attendance_date >= %s", "ar.attendance_date <= %s"]
        params: list[object] = [worker_id, start, end]
        if site_id is not None:
            clauses.append("ar.site_id=%s")
            params.append(site_id)
        if statuses:
            clauses.append("ar.status IN (" + ", ".join(["%s"] * len(statuses)) + ")")
            params.extend(s.value for s in statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where_sql(clauses)} ORDER BY ar.attendance_date ASC", tuple(params))
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("attendance_records", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def update(self, record_id: int, changes: Mapping[str, Any]) -> bool:
        assignments, params = set_sql(changes, _COLUMNS)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE attendance_records SET {assignments} WHERE id=%s", (*params, record_id))
            return cur.rowcount > 0

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
