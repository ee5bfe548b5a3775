from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_user_id, employee_required, handles_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_service

    @app.route("/api/employee/leaves", methods=["GET"], endpoint="my_leaves")
    @employee_required
    @handles_errors("Failed to fetch leaves")
    def my_leaves():
        return jsonify([asdict(lv) for lv in leaves.list_mine(current_user_id())])

    @app.route("/api/employee/leaves", methods=["POST"], endpoint="apply_leave")
    @employee_required
    @handles_errors("Failed to apply leave")
    def apply_leave():
        body = json_body()
        leaves.apply(
            user_id=current_user_id(),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            reason=body.get("reason"),
        )
        return jsonify({"msg": "Leave applied"})

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    @handles_errors("Failed to fetch leaves")
    def admin_leaves():
        return jsonify(list(leaves.list_all(status=request.args.get("status"))))

    @app.route("/api/admin/leaves/<int:leave_id>", methods=["PUT"], endpoint="admin_update_leave")
    @admin_required
    @handles_errors("Failed to update leave")
    def admin_update_leave(leave_id: int):
        leaves.decide(leave_id, json_body().get("status"))
        return jsonify({"msg": "Leave updated successfully"})
