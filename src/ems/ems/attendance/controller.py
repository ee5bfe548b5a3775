from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_user_id, handles_errors, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/employee/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    @handles_errors("Failed to check in")
    def checkin():
        attendance.check_in(current_user_id())
        return jsonify({"msg": "Checked in successfully"})

    @app.route("/api/employee/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    @handles_errors("Failed to check out")
    def checkout():
        attendance.check_out(current_user_id())
        return jsonify({"msg": "Checked out successfully"})

    @app.route("/api/employee/today-attendance", methods=["GET"], endpoint="today_attendance")
    @login_required
    @handles_errors("Failed to fetch today's attendance")
    def today_attendance():
        return jsonify(attendance.today_status(current_user_id()))

    @app.route("/api/employee/my-attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    @handles_errors("Failed to fetch attendance")
    def my_attendance():
        return jsonify(attendance.history(current_user_id()))

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    @handles_errors("Failed to fetch attendance")
    def admin_attendance():
        return jsonify(list(attendance.list_all()))

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["PUT"], endpoint="admin_update_attendance")
    @admin_required
    @handles_errors("Failed to update attendance")
    def admin_update_attendance(attendance_id: int):
        attendance.update_status(attendance_id, json_body().get("status"))
        return jsonify({"msg": "Attendance updated successfully"})
