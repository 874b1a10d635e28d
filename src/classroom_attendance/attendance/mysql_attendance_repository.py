from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import SessionAttendanceRow
from .repository import AttendanceRepository, AttendanceUnitOfWork


class _MySQLAttendanceUnitOfWork(AttendanceUnitOfWork):
    def __init__(self, cur):
        self._cur = cur

    def lock_session(self, session_id: int) -> Optional[int]:
        # FOR UPDATE serializes commits on the same session; other sessions are unaffected.
        self._cur.execute("SELECT class_id FROM sessions WHERE id=%s FOR UPDATE", (int(session_id),))
        r = fetchone(self._cur)
        return int(r["class_id"]) if r else None

    def count_students_in_class(self, student_ids: Sequence[int], class_id: int) -> int:
        ids = [int(s) for s in student_ids]
        if not ids:
            return 0
        self._cur.execute(
            f"SELECT COUNT(*) AS n FROM students WHERE id IN ({in_clause(ids)}) AND class_id=%s",
            tuple(ids) + (int(class_id),),
        )
        r = fetchone(self._cur)
        return int(r["n"]) if r else 0

    def upsert(self, *, session_id: int, student_id: int, status: AttendanceStatus) -> None:
        self._cur.execute(
            """
            INSERT INTO attendance(session_id, student_id, status, marked_at)
            VALUES(%s,%s,%s,CURRENT_TIMESTAMP)
            ON DUPLICATE KEY UPDATE status=VALUES(status)
            """,
            (int(session_id), int(student_id), status.value),
        )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[AttendanceUnitOfWork]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield _MySQLAttendanceUnitOfWork(cur)

    def list_for_session(self, session_id: int) -> Sequence[SessionAttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.status, a.marked_at,
                       s.id AS student_id, s.name AS student_name, s.roll_number,
                       sess.date, sess.topic, c.name AS class_name
                FROM attendance a
                JOIN students s ON a.student_id = s.id
                JOIN sessions sess ON a.session_id = sess.id
                JOIN classes c ON sess.class_id = c.id
                WHERE a.session_id=%s
                ORDER BY s.name
                """,
                (int(session_id),),
            )
            return [
                SessionAttendanceRow(
                    record_id=int(r["id"]),
                    status=AttendanceStatus(r["status"]),
                    marked_at=r.get("marked_at"),
                    student_id=int(r["student_id"]),
                    student_name=r["student_name"],
                    roll_number=r.get("roll_number"),
                    date=r["date"],
                    topic=r.get("topic"),
                    class_name=r["class_name"],
                )
                for r in fetchall(cur)
            ]
