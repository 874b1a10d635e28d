from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pytest

from classroom_attendance.core.enums import Role
from classroom_attendance.main import create_app
from classroom_attendance.users.model import Principal, User
from fakes import SchoolData, build_fake_container


@dataclass
class Seeded:
    data: SchoolData
    class_id: int
    other_class_id: int
    alice_id: int
    bob_id: int
    outsider_id: int
    session_id: int
    admin: User
    teacher: User
    student: User

    @property
    def admin_p(self) -> Principal:
        return Principal.from_user(self.admin)

    @property
    def teacher_p(self) -> Principal:
        return Principal.from_user(self.teacher)

    @property
    def student_p(self) -> Principal:
        return Principal.from_user(self.student)


@pytest.fixture
def seeded() -> Seeded:
    data = SchoolData()
    klass = data.add_class("Class 12", "Science stream")
    other = data.add_class("Class 11")
    alice = data.add_student("Alice", klass.class_id, "101")
    bob = data.add_student("Bob", klass.class_id, "102")
    outsider = data.add_student("Olga", other.class_id, "201")
    sess = data.add_session(klass.class_id, date(2026, 3, 2), "Algebra")

    admin = data.add_user("admin", "admin123", Role.ADMIN)
    teacher = data.add_user("teacher1", "teacher123", Role.TEACHER, class_id=klass.class_id, display_name="Ms. Rao")
    student = data.add_user("alice", "student123", Role.STUDENT, class_id=klass.class_id, student_id=alice.student_id)

    return Seeded(
        data=data,
        class_id=klass.class_id,
        other_class_id=other.class_id,
        alice_id=alice.student_id,
        bob_id=bob.student_id,
        outsider_id=outsider.student_id,
        session_id=sess.session_id,
        admin=admin,
        teacher=teacher,
        student=student,
    )


@pytest.fixture
def container(seeded):
    return build_fake_container(seeded.data)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Log in through the API and return the auth headers."""

    def _login(username: str, password: str, role: str) -> dict:
        resp = client.post("/api/login", json={"username": username, "password": password, "role": role})
        assert resp.status_code == 200, resp.get_json()
        return {"X-Auth-Token": resp.get_json()["token"]}

    return _login
