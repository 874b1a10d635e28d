from __future__ import annotations

from flask import Flask

from ..common.http import current_principal, make_login_required, respond
from ..container import Container
from ..core.result import capture


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service.resolve)

    @app.route("/api/dashboard/admin", methods=["GET"], endpoint="admin_dashboard")
    @login_required
    def admin_dashboard():
        return respond(capture(lambda: container.dashboard_service.admin_stats(current_principal())))

    @app.route("/api/dashboard/teacher", methods=["GET"], endpoint="teacher_dashboard")
    @login_required
    def teacher_dashboard():
        return respond(capture(lambda: container.dashboard_service.teacher_stats(current_principal())))
