from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def fetch_count(cur) -> int:
    row = cur.fetchone()
    if not row:
        return 0
    return int(row["total"] if isinstance(row, dict) else row[0])


def as_float(value: Any) -> Optional[float]:
    """DECIMAL columns come back as Decimal."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return float(value)


def as_bool(value: Any) -> bool:
    return bool(int(value)) if value is not None else False


def search_clause(term: Optional[str], columns: Sequence[str], clauses: list[str], params: list[object]) -> None:
    """Append a case-insensitive ``col LIKE %term%`` OR-group over columns."""
    if not term:
        return
    pattern = f"%{term.lower()}%"
    clauses.append("(" + " OR ".join(f"LOWER({c}) LIKE %s" for c in columns) + ")")
    params.extend(pattern for _ in columns)


def where_sql(clauses: Iterable[str]) -> str:
    clauses = list(clauses)
    return ("WHERE " + " AND ".join(clauses)) if clauses else ""


def _db_value(value: Any) -> Any:
    return getattr(value, "value", value)


def set_sql(changes: Mapping[str, Any], allowed: Iterable[str]) -> Tuple[str, list]:
    """Translate a {column: value} change set into ``a=%s, b=%s``; unknown keys are ignored."""
    allowed = set(allowed)
    parts: list[str] = []
    params: list[object] = []
    for column, value in changes.items():
        if column not in allowed:
            continue
        parts.append(f"{column}=%s")
        params.append(_db_value(value))
    return ", ".join(parts), params


def insert_sql(table: str, values: Mapping[str, Any], allowed: Iterable[str]) -> Tuple[str, list]:
    allowed = set(allowed)
    columns = [c for c in values if c in allowed]
    placeholders = ", ".join(["%s"] * len(columns))
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
    return sql, [_db_value(values[c]) for c in columns]
