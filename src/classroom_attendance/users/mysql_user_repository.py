from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TeacherRow, User
from .repository import UserRepository

_USER_COLUMNS = """
    id, username, password_hash, role, display_name, class_id, student_id,
    email, phone, subject, experience
"""


def _to_user(r: dict) -> User:
    return User(
        user_id=int(r["id"]),
        username=r["username"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        display_name=r.get("display_name"),
        class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
        student_id=int(r["student_id"]) if r.get("student_id") is not None else None,
        email=r.get("email"),
        phone=r.get("phone"),
        subject=r.get("subject"),
        experience=r.get("experience"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        display_name: Optional[str] = None,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        subject: Optional[str] = None,
        experience: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory, conflict_message="Username already exists") as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, role, display_name, class_id, student_id,
                                  email, phone, subject, experience)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    username,
                    password_hash,
                    role.value,
                    display_name,
                    class_id,
                    student_id,
                    email,
                    phone,
                    subject,
                    experience,
                ),
            )
            return int(cur.lastrowid)

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def list_teachers(self, *, class_id: Optional[int] = None) -> Sequence[TeacherRow]:
        clauses = ["u.role=%s"]
        params: list[object] = [Role.TEACHER.value]
        if class_id is not None:
            clauses.append("u.class_id=%s")
            params.append(int(class_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT u.id, u.username, u.display_name, u.class_id,
                       u.email, u.phone, u.subject, u.experience,
                       c.name AS class_name
                FROM users u
                LEFT JOIN classes c ON u.class_id = c.id
                WHERE {where}
                ORDER BY COALESCE(u.display_name, u.username)
                """,
                tuple(params),
            )
            return [
                TeacherRow(
                    user_id=int(r["id"]),
                    username=r["username"],
                    display_name=r.get("display_name"),
                    class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
                    class_name=r.get("class_name"),
                    email=r.get("email"),
                    phone=r.get("phone"),
                    subject=r.get("subject"),
                    experience=r.get("experience"),
                )
                for r in fetchall(cur)
            ]

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users WHERE role=%s", (role.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
