from __future__ import annotations

from datetime import date

import pytest

from classroom_attendance.core.enums import Role
from classroom_attendance.core.exceptions import AuthorizationError
from classroom_attendance.users.model import Principal


def test_admin_stats(seeded, container):
    assert container.dashboard_service.admin_stats(seeded.admin_p) == {
        "total_students": 3,
        "total_teachers": 1,
        "total_classes": 2,
    }


def test_teacher_stats(seeded, container):
    seeded.data.add_session(seeded.class_id, date(2026, 3, 2), "Second period")
    seeded.data.add_session(seeded.class_id, date(2026, 3, 3))

    stats = container.dashboard_service.teacher_stats(seeded.teacher_p, today=date(2026, 3, 2))

    assert stats == {"class_id": seeded.class_id, "class_name": "Class 12", "student_count": 2, "today_sessions": 2}


def test_teacher_without_class(container):
    teacher = Principal(user_id=50, username="floater", role=Role.TEACHER)
    assert container.dashboard_service.teacher_stats(teacher) == {
        "class_id": None,
        "class_name": None,
        "student_count": 0,
        "today_sessions": 0,
    }


def test_dashboards_are_role_bound(seeded, container):
    with pytest.raises(AuthorizationError):
        container.dashboard_service.admin_stats(seeded.teacher_p)
    with pytest.raises(AuthorizationError):
        container.dashboard_service.teacher_stats(seeded.admin_p)
