from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import (
    admin_required,
    current_user_id,
    employee_required,
    handles_errors,
    json_body,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    # -------- Auth --------
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @handles_errors("Login failed")
    def login():
        body = json_body()
        su = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        session.clear()
        session["user_id"] = su.user_id
        session["role"] = su.role.value
        return jsonify({"user": su.user})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"msg": "Logged out"})

    # -------- Departments --------
    @app.route("/api/admin/departments", methods=["GET"], endpoint="admin_departments")
    @admin_required
    @handles_errors("Failed to fetch departments")
    def admin_departments():
        return jsonify(list(container.organization_service.list_departments()))

    @app.route("/api/admin/departments", methods=["POST"], endpoint="admin_add_department")
    @admin_required
    @handles_errors("Failed to add department")
    def admin_add_department():
        container.organization_service.add_department(json_body().get("name"))
        return jsonify({"msg": "Department added"})

    @app.route("/api/admin/departments/<int:dept_id>", methods=["DELETE"], endpoint="admin_delete_department")
    @admin_required
    @handles_errors("Failed to delete department")
    def admin_delete_department(dept_id: int):
        container.organization_service.delete_department(dept_id)
        return jsonify({"msg": "Department deleted"})

    # -------- Positions --------
    @app.route("/api/admin/positions", methods=["GET"], endpoint="admin_positions")
    @admin_required
    @handles_errors("Failed to fetch positions")
    def admin_positions():
        return jsonify(list(container.organization_service.list_positions()))

    @app.route("/api/admin/positions", methods=["POST"], endpoint="admin_add_position")
    @admin_required
    @handles_errors("Failed to add position")
    def admin_add_position():
        container.organization_service.add_position(json_body().get("name"))
        return jsonify({"msg": "Position added"})

    @app.route("/api/admin/positions/<int:position_id>", methods=["DELETE"], endpoint="admin_delete_position")
    @admin_required
    @handles_errors("Failed to delete position")
    def admin_delete_position(position_id: int):
        container.organization_service.delete_position(position_id)
        return jsonify({"msg": "Position deleted"})

    # -------- Employees (admin) --------
    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    @handles_errors("Failed to fetch employees")
    def admin_employees():
        return jsonify(list(container.employee_service.list_employees()))

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_add_employee")
    @admin_required
    @handles_errors("Failed to add employee")
    def admin_add_employee():
        container.employee_service.create_employee(json_body())
        return jsonify({"msg": "Employee added successfully"})

    @app.route("/api/admin/employees/<int:user_id>", methods=["PUT"], endpoint="admin_update_employee")
    @admin_required
    @handles_errors("Failed to update employee")
    def admin_update_employee(user_id: int):
        container.employee_service.update_employee(user_id, json_body())
        return jsonify({"msg": "Employee updated successfully"})

    @app.route("/api/admin/employees/<int:user_id>", methods=["DELETE"], endpoint="admin_delete_employee")
    @admin_required
    @handles_errors("Failed to delete employee")
    def admin_delete_employee(user_id: int):
        container.employee_service.delete_employee(user_id)
        return jsonify({"msg": "Employee deleted successfully"})

    # -------- Profile (employee) --------
    @app.route("/api/employee/profile", methods=["GET"], endpoint="my_profile")
    @employee_required
    @handles_errors("Failed to fetch profile")
    def my_profile():
        return jsonify(container.employee_service.get_profile(current_user_id()))

    @app.route("/api/employee/profile", methods=["PUT"], endpoint="update_my_profile")
    @employee_required
    @handles_errors("Failed to update profile")
    def update_my_profile():
        body = json_body()
        container.employee_service.update_profile(
            current_user_id(),
            name=body.get("name"),
            phone=body.get("phone"),
            photo=body.get("photo"),
        )
        return jsonify({"msg": "Profile updated"})

    @app.route("/api/employee/reset-password", methods=["PUT"], endpoint="reset_password")
    @employee_required
    @handles_errors("Failed to reset password")
    def reset_password():
        body = json_body()
        container.employee_service.reset_password(
            current_user_id(),
            current_password=body.get("current_password"),
            new_password=body.get("new_password"),
        )
        return jsonify({"msg": "Password updated successfully"})
