from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import UpstreamUnavailable
from .connection import DatabaseConnection

# Errors that mean "the server went away", as opposed to a bad statement or row.
_STRUCTURAL_ERRORS = (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)


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
    except _STRUCTURAL_ERRORS as exc:
        _safe_rollback(conn)
        raise UpstreamUnavailable(f"Database unavailable: {exc}") from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except _STRUCTURAL_ERRORS:
        # Connection already gone; nothing to roll back.
        pass


def is_duplicate_key(exc: BaseException) -> bool:
    return isinstance(exc, mysql.connector.errors.IntegrityError) and getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_decimal(value: Any) -> Any:
    """Normalize numeric columns across connector implementations.

    mysql-connector returns DECIMAL as Decimal, but SUM() over an empty set is NULL and
    some drivers hand back str/int. Unknown values pass through so callers can validate.
    """

    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        try:
            return Decimal(str(value))
        except InvalidOperation:
            return value
    return value
