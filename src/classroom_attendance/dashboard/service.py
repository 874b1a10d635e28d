from __future__ import annotations

from datetime import date
from typing import Optional

from ..access.policy import authorize
from ..class_sessions.repository import ClassSessionRepository
from ..classes.repository import ClassRepository, StudentRepository
from ..common.datetime_utils import now_local
from ..core.enums import Action, Role
from ..users.model import Principal
from ..users.repository import UserRepository


class DashboardService:
    """Headline counters for the admin and teacher landing pages."""

    def __init__(
        self,
        classes: ClassRepository,
        students: StudentRepository,
        users: UserRepository,
        sessions: ClassSessionRepository,
    ):
        self._classes = classes
        self._students = students
        self._users = users
        self._sessions = sessions

    def admin_stats(self, principal: Optional[Principal]) -> dict:
        authorize(principal, Action.VIEW_ADMIN_DASHBOARD)
        return {
            "total_students": self._students.count_all(),
            "total_teachers": self._users.count_by_role(Role.TEACHER),
            "total_classes": self._classes.count_all(),
        }

    def teacher_stats(self, principal: Optional[Principal], *, today: Optional[date] = None) -> dict:
        authorize(principal, Action.VIEW_TEACHER_DASHBOARD)
        class_id = principal.class_id
        empty = {"class_id": class_id, "class_name": None, "student_count": 0, "today_sessions": 0}
        if not class_id:
            return empty

        klass = self._classes.get_by_id(class_id)
        if not klass:
            return empty

        today = today or now_local().date()
        return {
            "class_id": klass.class_id,
            "class_name": klass.name,
            "student_count": self._students.count_all(class_id=klass.class_id),
            "today_sessions": self._sessions.count_for_class_on(class_id=klass.class_id, session_date=today),
        }
