from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_principal, current_token, json_body, make_login_required, respond
from ..container import Container
from ..core.result import capture


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service.resolve)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()

        def _login():
            issued = container.auth_service.login(data.get("username"), data.get("password"), data.get("role"))
            return {
                "message": "Login successful",
                "user": issued.principal.to_dict(),
                "token": issued.token,
                "expiresAt": issued.expires_at.isoformat(),
            }

        return respond(capture(_login))

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        container.auth_service.logout(current_token())
        return jsonify({"message": "Logged out"})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"user": current_principal().to_dict()})

    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    @login_required
    def list_teachers():
        result = capture(
            lambda: container.teacher_service.list_teachers(current_principal(), class_id=request.args.get("class_id"))
        )
        return respond(result, serialize=lambda rows: [r.to_dict() for r in rows])

    @app.route("/api/teachers", methods=["POST"], endpoint="create_teacher")
    @login_required
    def create_teacher():
        data = json_body()
        result = capture(
            lambda: container.teacher_service.create_teacher(
                current_principal(),
                username=data.get("username"),
                password=data.get("password"),
                display_name=data.get("display_name"),
                class_id=data.get("class_id"),
                email=data.get("email"),
                phone=data.get("phone"),
                subject=data.get("subject"),
                experience=data.get("experience"),
            )
        )
        return respond(result, status=201)
