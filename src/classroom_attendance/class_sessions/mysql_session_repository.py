from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassSession
from .repository import ClassSessionRepository


def _to_session(r: dict) -> ClassSession:
    return ClassSession(
        session_id=int(r["id"]),
        class_id=int(r["class_id"]),
        date=r["date"],
        topic=r.get("topic"),
        class_name=r.get("class_name"),
    )


class MySQLClassSessionRepository(ClassSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.id, s.class_id, s.date, s.topic, c.name AS class_name
                FROM sessions s
                JOIN classes c ON c.id = s.class_id
                WHERE s.id=%s
                """,
                (int(session_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_sessions(self, *, class_id: Optional[int] = None) -> Sequence[ClassSession]:
        clauses = ["1=1"]
        params: list[object] = []
        if class_id is not None:
            clauses.append("s.class_id=%s")
            params.append(int(class_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.class_id, s.date, s.topic, c.name AS class_name
                FROM sessions s
                JOIN classes c ON c.id = s.class_id
                WHERE {where}
                ORDER BY s.date DESC, s.id DESC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create_session(self, *, class_id: int, session_date: date, topic: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO sessions(class_id, date, topic) VALUES(%s,%s,%s)",
                (int(class_id), session_date, topic),
            )
            return int(cur.lastrowid)

    def count_for_class_on(self, *, class_id: int, session_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM sessions WHERE class_id=%s AND date=%s",
                (int(class_id), session_date),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
