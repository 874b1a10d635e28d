from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .class_sessions.mysql_session_repository import MySQLClassSessionRepository
from .class_sessions.repository import ClassSessionRepository
from .class_sessions.service import ClassSessionService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.mysql_student_repository import MySQLStudentRepository
from .classes.repository import ClassRepository, StudentRepository
from .classes.service import ClassService, StudentService
from .core.constants import DEFAULT_SESSION_TTL_HOURS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .reports.factory import ExporterFactory
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, TeacherService
from .users.session_store import InMemorySessionStore, SessionStore


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    classes_repo: ClassRepository
    students_repo: StudentRepository
    sessions_repo: ClassSessionRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository
    session_store: SessionStore

    auth_service: AuthService
    teacher_service: TeacherService
    class_service: ClassService
    student_service: StudentService
    class_session_service: ClassSessionService
    attendance_service: AttendanceService
    report_service: ReportService
    dashboard_service: DashboardService


def wire_container(
    *,
    users_repo: UserRepository,
    classes_repo: ClassRepository,
    students_repo: StudentRepository,
    sessions_repo: ClassSessionRepository,
    attendance_repo: AttendanceRepository,
    reports_repo: ReportRepository,
    session_store: SessionStore,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services on top of already constructed repositories."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        session_store=session_store,
        auth_service=AuthService(users_repo, session_store),
        teacher_service=TeacherService(users_repo, classes_repo),
        class_service=ClassService(classes_repo),
        student_service=StudentService(students_repo, classes_repo),
        class_session_service=ClassSessionService(sessions_repo, classes_repo),
        attendance_service=AttendanceService(attendance_repo, sessions_repo),
        report_service=ReportService(reports_repo, exporter_factory=ExporterFactory()),
        dashboard_service=DashboardService(classes_repo, students_repo, users_repo, sessions_repo),
    )


def build_container(
    *,
    db_config: dict,
    session_ttl_hours: int = DEFAULT_SESSION_TTL_HOURS,
    session_store: Optional[SessionStore] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        sessions_repo=MySQLClassSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        session_store=session_store or InMemorySessionStore(ttl=timedelta(hours=session_ttl_hours)),
    )
