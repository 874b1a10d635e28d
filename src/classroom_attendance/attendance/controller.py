from __future__ import annotations

from flask import Flask, request

from ..common.http import current_principal, json_body, make_login_required, respond
from ..container import Container
from ..core.result import capture


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service.resolve)

    @app.route("/api/attendance", methods=["POST"], endpoint="commit_attendance")
    @login_required
    def commit_attendance():
        data = json_body()
        result = capture(
            lambda: container.attendance_service.commit_attendance(
                current_principal(), session_id=data.get("session_id"), records=data.get("records")
            )
        )
        return respond(
            result,
            status=201,
            serialize=lambda r: {"message": "Attendance saved successfully", "saved": r.saved},
        )

    @app.route("/api/attendance/by-session", methods=["GET"], endpoint="attendance_by_session")
    @login_required
    def attendance_by_session():
        result = capture(
            lambda: container.attendance_service.list_for_session(
                current_principal(), session_id=request.args.get("session_id")
            )
        )
        return respond(result, serialize=lambda rows: [r.to_dict() for r in rows])
