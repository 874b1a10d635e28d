from __future__ import annotations

from flask import Flask, request

from ..common.http import current_principal, json_body, make_login_required, respond
from ..container import Container
from ..core.result import capture


def _dicts(rows):
    return [r.to_dict() for r in rows]


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service.resolve)

    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @login_required
    def list_classes():
        result = capture(lambda: container.class_service.list_classes(current_principal()))
        return respond(result, serialize=_dicts)

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    @login_required
    def create_class():
        data = json_body()
        result = capture(
            lambda: container.class_service.create_class(
                current_principal(), name=data.get("name"), description=data.get("description")
            )
        )
        return respond(result, status=201, serialize=lambda c: c.to_dict())

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @login_required
    def list_students():
        result = capture(
            lambda: container.student_service.list_students(current_principal(), class_id=request.args.get("class_id"))
        )
        return respond(result, serialize=_dicts)

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @login_required
    def create_student():
        data = json_body()
        result = capture(
            lambda: container.student_service.create_student(
                current_principal(),
                name=data.get("name"),
                class_id=data.get("class_id"),
                roll_number=data.get("roll_number"),
            )
        )
        return respond(result, status=201, serialize=lambda s: s.to_dict())
