from __future__ import annotations

from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ClassSummaryRow, StudentReportRow
from .repository import ReportRepository


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def student_history(self, student_id: int) -> Sequence[StudentReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.status, a.marked_at,
                       sess.id AS session_id, sess.date, sess.topic,
                       c.id AS class_id, c.name AS class_name
                FROM attendance a
                JOIN sessions sess ON a.session_id = sess.id
                JOIN classes c ON sess.class_id = c.id
                WHERE a.student_id=%s
                ORDER BY sess.date DESC, sess.id DESC
                """,
                (int(student_id),),
            )
            return [
                StudentReportRow(
                    session_id=int(r["session_id"]),
                    date=r["date"],
                    class_id=int(r["class_id"]),
                    class_name=r["class_name"],
                    topic=r.get("topic"),
                    status=AttendanceStatus(r["status"]),
                    marked_at=r.get("marked_at"),
                )
                for r in fetchall(cur)
            ]

    def class_summary(self, class_id: int) -> Sequence[ClassSummaryRow]:
        # Only sessions of this class in which the student was marked count towards total;
        # sessions where nobody was marked never enter the denominator.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT st.id AS student_id,
                       st.name AS student_name,
                       st.roll_number,
                       COUNT(DISTINCT sess.id) AS total,
                       COUNT(DISTINCT CASE WHEN a.status = 'present' THEN sess.id END) AS presents
                FROM students st
                LEFT JOIN attendance a ON a.student_id = st.id
                LEFT JOIN sessions sess ON sess.id = a.session_id AND sess.class_id = st.class_id
                WHERE st.class_id=%s
                GROUP BY st.id, st.name, st.roll_number
                ORDER BY st.name COLLATE utf8mb4_bin, st.id
                """,
                (int(class_id),),
            )
            return [
                ClassSummaryRow(
                    student_id=int(r["student_id"]),
                    student_name=r["student_name"],
                    roll_number=r.get("roll_number"),
                    total=int(r["total"] or 0),
                    presents=int(r["presents"] or 0),
                )
                for r in fetchall(cur)
            ]
