from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_identity, login_required
from ..common.validators import optional_date, optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/my-attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        rows = container.attendance_service.list_mine(
            current_identity(),
            start=optional_date(request.args.get("start"), "start"),
            end=optional_date(request.args.get("end"), "end"),
        )
        return jsonify(rows)

    @app.route("/api/attendance/all", methods=["GET"], endpoint="all_attendance")
    @login_required
    def all_attendance():
        rows = container.attendance_service.list_all(
            current_identity(),
            user_id=optional_int(request.args.get("user_id"), "user_id"),
            start=optional_date(request.args.get("start"), "start"),
            end=optional_date(request.args.get("end"), "end"),
        )
        return jsonify(rows)
