from __future__ import annotations

from pathlib import Path

from classroom_attendance.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use, _strip_line_comments
from classroom_attendance.main import SCHEMA_PATH


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"
    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_strips_database_statements_and_comments():
    sql = "CREATE DATABASE foo;\nUSE foo;\n-- comment\nCREATE TABLE x (id INT);\n"
    cleaned = _strip_line_comments(_strip_create_db_and_use(sql))
    assert list(_iter_sql_statements(cleaned)) == ["CREATE TABLE x (id INT)"]


def test_schema_file_declares_all_tables():
    sql = Path(SCHEMA_PATH).read_text(encoding="utf-8")
    statements = list(_iter_sql_statements(_strip_line_comments(_strip_create_db_and_use(sql))))
    created = [s.split("(")[0].split()[-1].strip("`") for s in statements if s.upper().startswith("CREATE TABLE")]
    assert set(created) >= {"classes", "students", "sessions", "attendance", "users"}
    assert "UNIQUE" in sql.upper()
