from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Mapping, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..common.refs import WORKER_REF_COLUMNS, worker_ref
from ..core.enums import MatchResult
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, insert_sql, where_sql
from .model import FingerprintLog
from .repository import FingerprintLogRepository

_COLUMNS = (
    "attendance_record_id",
    "worker_id",
    "device_id",
    "match_score",
    "matched_template_id",
    "scan_timestamp",
    "scan_quality",
    "match_result",
    "error_message",
)

_SELECT = f"""
    SELECT fl.*, {WORKER_REF_COLUMNS}, fd.device_name AS device_name
    FROM fingerprint_logs fl
    LEFT JOIN workers w ON w.id = fl.worker_id
    LEFT JOIN fingerprint_devices fd ON fd.id = fl.device_id
"""


def _row_to_log(r: dict) -> FingerprintLog:
    return FingerprintLog(
        id=int(r["id"]),
        match_result=MatchResult(r["match_result"]),
        scan_timestamp=r["scan_timestamp"],
        worker_id=r.get("worker_id"),
        device_id=r.get("device_id"),
        attendance_record_id=r.get("attendance_record_id"),
        match_score=r.get("match_score"),
        matched_template_id=r.get("matched_template_id"),
        scan_quality=r.get("scan_quality"),
        error_message=r.get("error_message"),
        worker=worker_ref(r),
        device_name=r.get("device_name"),
    )


class MySQLFingerprintLogRepository(FingerprintLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, log_id: int) -> Optional[FingerprintLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE fl.id=%s", (log_id,))
            r = fetchone(cur)
            return _row_to_log(r) if r else None

    def list(
        self,
        *,
        page: PageRequest,
        worker_id: Optional[int] = None,
        device_id: Optional[int] = None,
        match_result: Optional[MatchResult] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Page[FingerprintLog]:
        clauses: list[str] = []
        params: list[object] = []
        if worker_id is not None:
            clauses.append("fl.worker_id=%s")
            params.append(worker_id)
        if device_id is not None:
            clauses.append("fl.device_id=%s")
            params.append(device_id)
        if match_result is not None:
            clauses.append("fl.match_result=%s")
            params.append(match_result.value)
        if date_from is not None:
            clauses.append("fl.scan_timestamp >= %s")
            params.append(date_from)
        if date_to is not None:
            clauses.append("fl.scan_timestamp < %s")
            params.append(date_to + timedelta(days=1))
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM fingerprint_logs fl {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY fl.scan_timestamp DESC, fl.id DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_log(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def recent_for_template(self, template_id: int, limit: int) -> Sequence[FingerprintLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE fl.matched_template_id=%s ORDER BY fl.scan_timestamp DESC LIMIT %s",
                (template_id, int(limit)),
            )
            return [_row_to_log(r) for r in fetchall(cur)]

    def count_for_template(self, template_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM fingerprint_logs WHERE matched_template_id=%s", (template_id,))
            return fetch_count(cur)

    def count_for_device(self, device_pk: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM fingerprint_logs WHERE device_id=%s", (device_pk,))
            return fetch_count(cur)

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("fingerprint_logs", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def link_attendance(self, log_id: int, attendance_record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE fingerprint_logs SET attendance_record_id=%s WHERE id=%s",
                (attendance_record_id, log_id),
            )
            return cur.rowcount > 0
