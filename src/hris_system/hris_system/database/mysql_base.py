from __future__ import annotations

import json
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

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


def as_decimal(value: Any) -> Optional[Decimal]:
    """Normalize DECIMAL/FLOAT column values.

    mysql-connector returns DECIMAL columns as Decimal, but FLOAT/DOUBLE as float
    and computed columns occasionally as str.
    """

    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def load_json_column(value: Any) -> dict:
    """JSON columns arrive as str (pure connector) or bytes (C extension)."""

    if value is None or value == "":
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    return dict(json.loads(value))
