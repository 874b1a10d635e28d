"""Example: drive the service layer directly (no Flask).

Controllers are thin; the rules live in the services.
"""

import importlib

from classroom_attendance.config import get_settings_module
from classroom_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    issued = container.auth_service.login("teacher1", "teacher123", "teacher")
    teacher = issued.principal
    for session in container.class_session_service.list_sessions(teacher)[:5]:
        print(session.to_dict())
    for row in container.report_service.class_summary(teacher, class_id=teacher.class_id):
        print(row.to_dict())


if __name__ == "__main__":
    main()
