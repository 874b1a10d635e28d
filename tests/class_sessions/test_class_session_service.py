from __future__ import annotations

from datetime import date

import pytest

from classroom_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_teacher_creates_session(seeded, container):
    created = container.class_session_service.create_session(
        seeded.teacher_p, class_id=seeded.class_id, date="2026-03-05", topic=" Trigonometry "
    )
    assert created.date == date(2026, 3, 5)
    assert created.topic == "Trigonometry"
    assert seeded.data.sessions[created.session_id].class_id == seeded.class_id


@pytest.mark.parametrize(
    "class_id, day, message",
    [
        (None, "2026-03-05", "class_id and date are required"),
        (1, "", "class_id and date are required"),
        ("abc", "2026-03-05", "Invalid class_id"),
        (1, "05/03/2026", "Invalid date format. Use YYYY-MM-DD"),
        (1, "2026-02-30", "Invalid date value"),
    ],
)
def test_create_session_validation(seeded, container, class_id, day, message):
    with pytest.raises(ValidationError, match=message):
        container.class_session_service.create_session(seeded.teacher_p, class_id=class_id, date=day)


def test_create_session_unknown_class(seeded, container):
    with pytest.raises(NotFoundError):
        container.class_session_service.create_session(seeded.teacher_p, class_id=999, date="2026-03-05")


def test_admins_cannot_create_sessions(seeded, container):
    with pytest.raises(AuthorizationError):
        container.class_session_service.create_session(seeded.admin_p, class_id=seeded.class_id, date="2026-03-05")


def test_sessions_newest_first_with_class_name(seeded, container):
    seeded.data.add_session(seeded.class_id, date(2026, 3, 9), "Geometry")
    seeded.data.add_session(seeded.other_class_id, date(2026, 3, 10), "Chemistry")

    rows = container.class_session_service.list_sessions(seeded.teacher_p, class_id=seeded.class_id)

    assert [(s.topic, s.class_name) for s in rows] == [("Geometry", "Class 12"), ("Algebra", "Class 12")]
    assert len(container.class_session_service.list_sessions(seeded.admin_p)) == 3


def test_students_are_pinned_to_their_class(seeded, container):
    seeded.data.add_session(seeded.other_class_id, date(2026, 3, 10), "Chemistry")

    rows = container.class_session_service.list_sessions(seeded.student_p, class_id=seeded.other_class_id)

    assert [s.topic for s in rows] == ["Algebra"]
