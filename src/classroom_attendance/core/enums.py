from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Principal roles used for access decisions."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """The only statuses that may be persisted for an attendance record."""

    PRESENT = "present"
    ABSENT = "absent"


class ExportFormat(str, Enum):
    TABULAR = "tabular"
    DOCUMENT = "document"


class Action(str, Enum):
    """Operations guarded by the access policy."""

    CREATE_CLASS = "createClass"
    LIST_CLASSES = "listClasses"
    CREATE_TEACHER = "createTeacher"
    LIST_TEACHERS = "listTeachers"
    CREATE_STUDENT = "createStudent"
    LIST_STUDENTS = "listStudents"
    CREATE_SESSION = "createSession"
    VIEW_SESSIONS_FOR_CLASS = "viewSessionsForClass"
    MARK_ATTENDANCE = "markAttendance"
    VIEW_SESSION_ATTENDANCE = "viewSessionAttendance"
    VIEW_STUDENT_REPORT = "viewStudentReport"
    EXPORT_STUDENT_REPORT = "exportStudentReport"
    VIEW_CLASS_SUMMARY = "viewClassSummary"
    EXPORT_CLASS_SUMMARY = "exportClassSummary"
    VIEW_ADMIN_DASHBOARD = "viewAdminDashboard"
    VIEW_TEACHER_DASHBOARD = "viewTeacherDashboard"
    VIEW_SELF = "viewSelf"
