from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_identity, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        data = json_body()
        request_id = container.leave_service.submit(
            current_identity(),
            leave_type=data.get("leave_type"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            remarks=data.get("remarks"),
        )
        return jsonify({"message": "Leave request submitted successfully", "id": request_id}), 201

    @app.route("/api/leave/my-leaves", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        return jsonify(container.leave_service.list_mine(current_identity()))

    @app.route("/api/leave/all", methods=["GET"], endpoint="all_leaves")
    @login_required
    def all_leaves():
        return jsonify(container.leave_service.list_all(current_identity(), status=request.args.get("status")))

    @app.route("/api/leave/<int:request_id>/approve", methods=["PUT"], endpoint="decide_leave")
    @login_required
    def decide_leave(request_id: int):
        data = json_body()
        message = container.leave_service.decide(
            current_identity(),
            request_id,
            status=data.get("status"),
            admin_comment=data.get("admin_comment"),
        )
        return jsonify({"message": message})
