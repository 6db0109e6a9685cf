from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.http import current_identity, json_body, login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        identifier = data.get("username") or data.get("email") or ""
        identity = container.auth_service.authenticate(str(identifier), str(data.get("password") or ""))

        session.clear()
        session["user_id"] = identity.user_id
        session["role"] = identity.role.value
        logger.info("User %s signed in as %s", identity.user_id, identity.role.value)

        return jsonify({"message": "Signed in", "user": container.auth_service.me(identity)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return jsonify({"message": "Signed out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return jsonify({"user": container.auth_service.me(current_identity())})

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        return jsonify(container.employee_service.list(current_identity()))

    @app.route("/api/employees/<int:user_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(user_id: int):
        return jsonify(container.employee_service.get(current_identity(), user_id))

    @app.route("/api/employees/<int:user_id>", methods=["PUT"], endpoint="update_employee")
    @login_required
    def update_employee(user_id: int):
        message = container.employee_service.update(current_identity(), user_id, json_body())
        return jsonify({"message": message})
