from __future__ import annotations

from flask import Flask, request

from ..common.http import current_principal, make_login_required, respond, send_export
from ..container import Container
from ..core.result import capture


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service.resolve)
    reports = container.report_service

    @app.route("/api/reports/by-student", methods=["GET"], endpoint="report_by_student")
    @login_required
    def report_by_student():
        result = capture(lambda: reports.student_report(current_principal(), student_id=request.args.get("student_id")))
        return respond(result, serialize=lambda rows: [r.to_dict() for r in rows])

    @app.route("/api/reports/summary-by-class", methods=["GET"], endpoint="report_summary_by_class")
    @login_required
    def report_summary_by_class():
        result = capture(lambda: reports.class_summary(current_principal(), class_id=request.args.get("class_id")))
        return respond(result, serialize=lambda rows: [r.to_dict() for r in rows])

    @app.route("/api/reports/by-student/export", methods=["GET"], endpoint="export_report_by_student")
    @login_required
    def export_report_by_student():
        result = capture(
            lambda: reports.export_student_report(
                current_principal(),
                student_id=request.args.get("student_id"),
                export_format=request.args.get("format"),
            )
        )
        return send_export(result)

    @app.route("/api/reports/summary-by-class/export", methods=["GET"], endpoint="export_summary_by_class")
    @login_required
    def export_summary_by_class():
        result = capture(
            lambda: reports.export_class_summary(
                current_principal(),
                class_id=request.args.get("class_id"),
                export_format=request.args.get("format"),
            )
        )
        return send_export(result)
