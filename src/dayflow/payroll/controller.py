from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.http import current_identity, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _filters() -> dict:
        return {
            "month": request.args.get("month"),
            "year": request.args.get("year"),
            "user_id": request.args.get("user_id") or request.args.get("userId"),
        }

    @app.route("/api/payroll", methods=["GET"], endpoint="list_payroll")
    @login_required
    def list_payroll():
        return jsonify(container.payroll_service.list(current_identity(), **_filters()))

    @app.route("/api/payroll", methods=["POST"], endpoint="create_payroll")
    @login_required
    def create_payroll():
        payroll_id, net_salary = container.payroll_service.create(current_identity(), json_body())
        return jsonify({"message": "Payroll saved successfully", "id": payroll_id, "net_salary": net_salary}), 201

    @app.route("/api/payroll/my-payroll", methods=["GET"], endpoint="my_payroll")
    @login_required
    def my_payroll():
        return jsonify(container.payroll_service.list_mine(current_identity()))

    @app.route("/api/payroll/all", methods=["GET"], endpoint="all_payroll")
    @login_required
    def all_payroll():
        return jsonify(container.payroll_service.list_all(current_identity(), **_filters()))

    @app.route("/api/payroll/<int:payroll_id>/status", methods=["PUT"], endpoint="set_payroll_status")
    @login_required
    def set_payroll_status(payroll_id: int):
        message = container.payroll_service.set_status(current_identity(), payroll_id, json_body().get("status"))
        return jsonify({"message": message})

    @app.route("/api/reports/salary-slip/<int:user_id>", methods=["GET"], endpoint="salary_slip")
    @login_required
    def salary_slip(user_id: int):
        svc = container.payroll_service
        slip = svc.salary_slip(
            current_identity(),
            user_id,
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        if request.args.get("format") == "text":
            return Response(
                svc.render_salary_slip(slip),
                mimetype="text/plain",
                headers={"Content-Disposition": f'attachment; filename="{svc.slip_filename(slip)}"'},
            )
        return jsonify(slip.to_dict())
