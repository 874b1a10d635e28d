"""Role-based access rules.

Every check is evaluated from the principal and the request scope at call time; nothing
is cached between requests. ``authorize`` returns ``None`` when the action is allowed and
raises otherwise, so services can call it as a guard clause.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Action, ExportFormat, Role
from ..core.exceptions import AuthorizationError, UnauthenticatedError, ValidationError
from ..users.model import Principal

ADMIN_ONLY = frozenset(
    {
        Action.CREATE_CLASS,
        Action.CREATE_TEACHER,
        Action.LIST_TEACHERS,
        Action.CREATE_STUDENT,
        Action.VIEW_ADMIN_DASHBOARD,
    }
)

# Admins may view sessions and attendance but never create or mark them.
TEACHER_ONLY = frozenset(
    {
        Action.CREATE_SESSION,
        Action.MARK_ATTENDANCE,
        Action.VIEW_TEACHER_DASHBOARD,
    }
)

STAFF_ONLY = frozenset(
    {
        Action.VIEW_SESSION_ATTENDANCE,
        Action.VIEW_CLASS_SUMMARY,
        Action.EXPORT_CLASS_SUMMARY,
    }
)

ANY_ROLE = frozenset(
    {
        Action.LIST_CLASSES,
        Action.LIST_STUDENTS,
        Action.VIEW_SESSIONS_FOR_CLASS,
        Action.VIEW_SELF,
    }
)


@dataclass(frozen=True)
class AccessScope:
    """The resource a request is about."""

    class_id: Optional[int] = None
    student_id: Optional[int] = None
    export_format: Optional[ExportFormat] = None


@dataclass(frozen=True)
class StudentFilter:
    student_id: Optional[int] = None
    class_id: Optional[int] = None
    empty: bool = False


@dataclass(frozen=True)
class SessionFilter:
    class_id: Optional[int] = None
    empty: bool = False


def require_principal(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise UnauthenticatedError("Unauthorized")
    return principal


def authorize(principal: Optional[Principal], action: Action, scope: AccessScope = AccessScope()) -> None:
    p = require_principal(principal)

    if action in ADMIN_ONLY:
        if p.role != Role.ADMIN:
            raise AuthorizationError("Forbidden")
        return

    if action in TEACHER_ONLY:
        if p.role != Role.TEACHER:
            raise AuthorizationError("Forbidden")
        return

    if action in STAFF_ONLY:
        if p.role not in (Role.ADMIN, Role.TEACHER):
            raise AuthorizationError("Forbidden")
        return

    if action in ANY_ROLE:
        return

    if action == Action.VIEW_STUDENT_REPORT:
        _check_own_student(p, scope.student_id, "Forbidden: You can only view your own attendance")
        return

    if action == Action.EXPORT_STUDENT_REPORT:
        _check_own_student(p, scope.student_id, "Forbidden")
        # Ownership before format.
        if p.role == Role.STUDENT and scope.export_format != ExportFormat.DOCUMENT:
            raise ValidationError("Students can only download PDF reports.")
        return

    raise AuthorizationError("Forbidden")


def _check_own_student(p: Principal, student_id: Optional[int], message: str) -> None:
    if p.role in (Role.ADMIN, Role.TEACHER):
        return
    if p.role == Role.STUDENT and p.student_id and student_id is not None and int(p.student_id) == int(student_id):
        return
    raise AuthorizationError(message)


def narrow_students(principal: Optional[Principal], class_id: Optional[int] = None) -> StudentFilter:
    """Students see only their own record; staff see everyone, optionally one class."""

    p = require_principal(principal)
    if p.role == Role.STUDENT:
        if not p.student_id:
            return StudentFilter(empty=True)
        return StudentFilter(student_id=int(p.student_id))
    return StudentFilter(class_id=class_id)


def narrow_sessions(principal: Optional[Principal], class_id: Optional[int] = None) -> SessionFilter:
    """Staff may look at any class; a student is pinned to their own class."""

    p = require_principal(principal)
    if p.role == Role.STUDENT:
        if not p.class_id:
            return SessionFilter(empty=True)
        return SessionFilter(class_id=int(p.class_id))
    return SessionFilter(class_id=class_id)
