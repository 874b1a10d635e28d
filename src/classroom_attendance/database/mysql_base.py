from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, conflict_message: str = "Duplicate entry"):
    """One connection, one transaction.

    Commits when the block exits normally, rolls back on any exception. Driver errors are
    re-raised as ``ConflictError`` (duplicate key) or ``StoreError``; domain errors raised
    inside the block pass through unchanged after the rollback.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.exception("Could not open database connection")
        raise StoreError(detail=str(e)) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        _safe_rollback(conn)
        if getattr(e, "errno", None) == errorcode.ER_DUP_ENTRY:
            raise ConflictError(conflict_message) from e
        logger.exception("Integrity error, transaction rolled back")
        raise StoreError(detail=str(e)) from e
    except mysql.connector.Error as e:
        _safe_rollback(conn)
        logger.exception("Database error, transaction rolled back")
        raise StoreError(detail=str(e)) from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed", exc_info=True)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for ``IN (...)`` with the driver's native ``%s`` parameters."""

    if not values:
        raise ValueError("in_clause needs at least one value")
    return ", ".join(["%s"] * len(values))
