from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass
from .repository import ClassRepository


def _to_class(r: dict) -> SchoolClass:
    return SchoolClass(class_id=int(r["id"]), name=r["name"], description=r.get("description"))


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM classes WHERE id=%s", (int(class_id),))
            r = fetchone(cur)
            return _to_class(r) if r else None

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM classes ORDER BY name")
            return [_to_class(r) for r in fetchall(cur)]

    def create_class(self, *, name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory, conflict_message="A class with this name already exists") as (_, cur):
            cur.execute(
                "INSERT INTO classes(name, description) VALUES(%s,%s)",
                (name, description),
            )
            return int(cur.lastrowid)

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM classes")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
