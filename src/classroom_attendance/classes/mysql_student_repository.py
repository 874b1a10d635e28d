from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        name=r["name"],
        roll_number=r.get("roll_number"),
        class_id=int(r["class_id"]),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, roll_number, class_id FROM students WHERE id=%s",
                (int(student_id),),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_students(
        self,
        *,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> Sequence[Student]:
        clauses = ["1=1"]
        params: list[object] = []

        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))
        if student_id is not None:
            clauses.append("id=%s")
            params.append(int(student_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, name, roll_number, class_id
                FROM students
                WHERE {where}
                ORDER BY name
                """,
                tuple(params),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def create_student(self, *, name: str, roll_number: Optional[str], class_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO students(name, roll_number, class_id) VALUES(%s,%s,%s)",
                (name, roll_number, int(class_id)),
            )
            return int(cur.lastrowid)

    def count_all(self, *, class_id: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if class_id is None:
                cur.execute("SELECT COUNT(*) AS n FROM students")
            else:
                cur.execute("SELECT COUNT(*) AS n FROM students WHERE class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
