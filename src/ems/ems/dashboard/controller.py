from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, handles_errors, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employee/dashboard", methods=["GET"], endpoint="employee_dashboard")
    @login_required
    @handles_errors("Failed to fetch dashboard data")
    def employee_dashboard():
        return jsonify(container.dashboard_service.for_employee(current_user_id()))
