from __future__ import annotations

from flask import Flask, request

from ..common.http import current_principal, json_body, make_login_required, respond
from ..container import Container
from ..core.result import capture


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service.resolve)

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    @login_required
    def list_sessions():
        result = capture(
            lambda: container.class_session_service.list_sessions(
                current_principal(), class_id=request.args.get("class_id")
            )
        )
        return respond(result, serialize=lambda rows: [r.to_dict() for r in rows])

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    @login_required
    def create_session():
        data = json_body()
        result = capture(
            lambda: container.class_session_service.create_session(
                current_principal(),
                class_id=data.get("class_id"),
                date=data.get("date"),
                topic=data.get("topic"),
            )
        )
        return respond(result, status=201, serialize=lambda s: s.to_dict())
