from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..common.refs import WORKER_REF_COLUMNS, worker_ref
from ..core.enums import FingerPosition, Hand
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetch_count, fetchall, fetchone, insert_sql, set_sql, where_sql
from .model import FingerprintTemplate
from .repository import FingerprintTemplateRepository

_COLUMNS = (
    "worker_id",
    "template_data",
    "finger_position",
    "hand",
    "quality_score",
    "enrolled_by",
    "device_used",
    "enrollment_date",
    "is_active",
)

_SELECT = f"""
    SELECT ft.*, {WORKER_REF_COLUMNS}
    FROM fingerprint_templates ft
    JOIN workers w ON w.id = ft.worker_id
"""


def _row_to_template(r: dict) -> FingerprintTemplate:
    return FingerprintTemplate(
        id=int(r["id"]),
        worker_id=int(r["worker_id"]),
        template_data=r["template_data"],
        finger_position=FingerPosition(r["finger_position"]),
        hand=Hand(r["hand"]),
        quality_score=int(r["quality_score"]),
        enrolled_by=r.get("enrolled_by"),
        device_used=r.get("device_used"),
        enrollment_date=r.get("enrollment_date"),
        is_active=as_bool(r.get("is_active")),
        updated_at=r.get("updated_at"),
        worker=worker_ref(r),
    )


class MySQLFingerprintTemplateRepository(FingerprintTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, template_id: int) -> Optional[FingerprintTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE ft.id=%s", (template_id,))
            r = fetchone(cur)
            return _row_to_template(r) if r else None

    def list(
        self,
        *,
        page: PageRequest,
        worker_id: Optional[int] = None,
        finger_position: Optional[FingerPosition] = None,
        hand: Optional[Hand] = None,
        is_active: Optional[bool] = None,
    ) -> Page[FingerprintTemplate]:
        clauses: list[str] = []
        params: list[object] = []
        if worker_id is not None:
            clauses.append("ft.worker_id=%s")
            params.append(worker_id)
        if finger_position is not None:
            clauses.append("ft.finger_position=%s")
            params.append(finger_position.value)
        if hand is not None:
            clauses.append("ft.hand=%s")
            params.append(hand.value)
        if is_active is not None:
            clauses.append("ft.is_active=%s")
            params.append(int(is_active))
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM fingerprint_templates ft {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY ft.enrollment_date DESC, ft.id DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_template(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def list_active_for_worker(
        self,
        worker_id: int,
        *,
        finger_position: Optional[FingerPosition] = None,
        hand: Optional[Hand] = None,
    ) -> Sequence[FingerprintTemplate]:
        clauses = ["ft.worker_id=%s", "ft.is_active=1"]
        params: list[object] = [worker_id]
        if finger_position is not None:
            clauses.append("ft.finger_position=%s")
            params.append(finger_position.value)
        if hand is not None:
            clauses.append("ft.hand=%s")
            params.append(hand.value)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where_sql(clauses)} ORDER BY ft.quality_score DESC, ft.id ASC", tuple(params))
            return [_row_to_template(r) for r in fetchall(cur)]

    def find_active(self, worker_id: int, finger_position: FingerPosition, hand: Hand) -> Optional[FingerprintTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE ft.worker_id=%s AND ft.finger_position=%s AND ft.hand=%s AND ft.is_active=1",
                (worker_id, finger_position.value, hand.value),
            )
            r = fetchone(cur)
            return _row_to_template(r) if r else None

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("fingerprint_templates", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def update(self, template_id: int, changes: Mapping[str, Any]) -> bool:
        assignments, params = set_sql(changes, _COLUMNS)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE fingerprint_templates SET {assignments} WHERE id=%s", (*params, template_id))
            return cur.rowcount > 0

    def delete(self, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM fingerprint_templates WHERE id=%s", (template_id,))
            return cur.rowcount > 0
