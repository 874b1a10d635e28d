from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    target = DBConfig.from_dict(db_config)

    sql = Path(schema_path).read_text(encoding="utf-8")
    sql = _strip_line_comments(_strip_create_db_and_use(sql))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        count = 0
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
        logger.info("Applied %d schema statement(s) to %s", count, target.database)
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def ensure_demo_data(db_config: dict) -> None:
    """Demo class, student and one account per role. Safe to run repeatedly."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        def get_or_create(select_sql: str, select_args: tuple, insert_sql: str, insert_args: tuple) -> int:
            cur.execute(select_sql, select_args)
            row = cur.fetchone()
            if row:
                return int(row["id"])
            cur.execute(insert_sql, insert_args)
            return int(cur.lastrowid)

        class_id = get_or_create(
            "SELECT id FROM classes WHERE name=%s",
            ("Class 12",),
            "INSERT INTO classes (name, description) VALUES (%s, %s)",
            ("Class 12", "Demo class for examples"),
        )
        student_id = get_or_create(
            "SELECT id FROM students WHERE name=%s AND class_id=%s",
            ("aditya", class_id),
            "INSERT INTO students (name, roll_number, class_id) VALUES (%s, %s, %s)",
            ("aditya", "123", class_id),
        )

        def upsert_user(username: str, password: str, role: str, display_name: str, *, user_class_id=None, user_student_id=None) -> None:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET password_hash=%s, role=%s, display_name=%s, class_id=%s, student_id=%s
                    WHERE username=%s
                    """,
                    (password_hash, role, display_name, user_class_id, user_student_id, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (username, password_hash, role, display_name, class_id, student_id)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (username, password_hash, role, display_name, user_class_id, user_student_id),
                )

        upsert_user("admin", "admin123", "admin", "System Admin")
        upsert_user("teacher1", "teacher123", "teacher", "Demo Teacher", user_class_id=class_id)
        upsert_user("aditya", "student123", "student", "aditya", user_class_id=class_id, user_student_id=student_id)

        conn.commit()
        logger.info("Demo data ready (class_id=%s, student_id=%s)", class_id, student_id)
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
