from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.pagination import Page, PageRequest
from ..common.refs import SITE_REF_COLUMNS, site_ref
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    as_bool,
    db_cursor,
    fetch_count,
    fetchall,
    fetchone,
    insert_sql,
    search_clause,
    set_sql,
    where_sql,
)
from .model import FingerprintDevice
from .repository import FingerprintDeviceRepository

_COLUMNS = (
    "device_id",
    "device_name",
    "site_id",
    "ip_address",
    "mac_address",
    "manufacturer",
    "model",
    "serial_number",
    "firmware_version",
    "last_sync",
    "is_online",
    "is_active",
)

_SELECT = f"""
    SELECT fd.*, {SITE_REF_COLUMNS},
        (SELECT COUNT(*) FROM fingerprint_logs fl WHERE fl.device_id = fd.id) AS log_count
    FROM fingerprint_devices fd
    LEFT JOIN construction_sites s ON s.id = fd.site_id
"""


def _row_to_device(r: dict) -> FingerprintDevice:
    return FingerprintDevice(
        id=int(r["id"]),
        device_id=r["device_id"],
        device_name=r["device_name"],
        site_id=r.get("site_id"),
        ip_address=r.get("ip_address"),
        mac_address=r.get("mac_address"),
        manufacturer=r.get("manufacturer"),
        model=r.get("model"),
        serial_number=r.get("serial_number"),
        firmware_version=r.get("firmware_version"),
        last_sync=r.get("last_sync"),
        is_online=as_bool(r.get("is_online")),
        is_active=as_bool(r.get("is_active")),
        log_count=int(r.get("log_count") or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        site=site_ref(r),
    )


class MySQLFingerprintDeviceRepository(FingerprintDeviceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_where(self, clause: str, value: object) -> Optional[FingerprintDevice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {clause}", (value,))
            r = fetchone(cur)
            return _row_to_device(r) if r else None

    def get_by_id(self, device_pk: int) -> Optional[FingerprintDevice]:
        return self._get_where("fd.id=%s", device_pk)

    def get_by_device_id(self, device_id: str) -> Optional[FingerprintDevice]:
        return self._get_where("fd.device_id=%s", device_id)

    def get_by_serial(self, serial_number: str) -> Optional[FingerprintDevice]:
        return self._get_where("fd.serial_number=%s", serial_number)

    def list(
        self,
        *,
        page: PageRequest,
        site_id: Optional[int] = None,
        is_online: Optional[bool] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[FingerprintDevice]:
        clauses: list[str] = []
        params: list[object] = []
        if site_id is not None:
            clauses.append("fd.site_id=%s")
            params.append(site_id)
        if is_online is not None:
            clauses.append("fd.is_online=%s")
            params.append(int(is_online))
        if is_active is not None:
            clauses.append("fd.is_active=%s")
            params.append(int(is_active))
        search_clause(
            search,
            ("fd.device_name", "fd.device_id", "fd.manufacturer", "fd.model", "fd.serial_number"),
            clauses,
            params,
        )
        where = where_sql(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM fingerprint_devices fd {where}", tuple(params))
            total = fetch_count(cur)
            cur.execute(
                f"{_SELECT} {where} ORDER BY fd.created_at DESC, fd.id DESC LIMIT %s OFFSET %s",
                (*params, page.limit, page.offset),
            )
            items = [_row_to_device(r) for r in fetchall(cur)]
        return Page(items=items, total=total, request=page)

    def create(self, values: Mapping[str, Any]) -> int:
        sql, params = insert_sql("fingerprint_devices", values, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)

    def update(self, device_pk: int, changes: Mapping[str, Any]) -> bool:
        assignments, params = set_sql(changes, _COLUMNS)
        if not assignments:
            return False
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE fingerprint_devices SET {assignments} WHERE id=%s", (*params, device_pk))
            return cur.rowcount > 0

    def delete(self, device_pk: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM fingerprint_devices WHERE id=%s", (device_pk,))
            return cur.rowcount > 0
