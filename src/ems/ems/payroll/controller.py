from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_user_id, employee_required, handles_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/admin/salaries", methods=["GET"], endpoint="admin_salaries")
    @admin_required
    @handles_errors("Failed to fetch salaries")
    def admin_salaries():
        return jsonify(list(payroll.list_salaries()))

    @app.route("/api/admin/salaries", methods=["POST"], endpoint="admin_add_salary")
    @admin_required
    @handles_errors("Failed to add salary record")
    def admin_add_salary():
        body = json_body()
        record = payroll.create_salary(
            user_id=body.get("user_id"),
            month=body.get("month"),
            year=body.get("year"),
            bonus=body.get("bonus"),
            status=body.get("status"),
        )
        return jsonify({"msg": "Salary record added successfully", "basic": record.basic, "deductions": record.deductions})

    @app.route("/api/admin/salaries/bulk-status", methods=["PUT"], endpoint="admin_salaries_bulk_status")
    @admin_required
    @handles_errors("Failed to bulk update salary status")
    def admin_salaries_bulk_status():
        body = json_body()
        status = str(body.get("status") or "").lower()
        updated = payroll.bulk_update_status(salary_ids=body.get("salary_ids"), status=status)
        return jsonify({"msg": f"Successfully updated {updated} salary records to {status}", "updated": updated})

    @app.route("/api/admin/salaries/bulk-generate", methods=["POST"], endpoint="admin_salaries_bulk_generate")
    @admin_required
    @handles_errors("Failed to generate bulk salary records")
    def admin_salaries_bulk_generate():
        body = json_body()
        result = payroll.bulk_generate(
            month=body.get("month"),
            year=body.get("year"),
            bonus_percentage=body.get("bonusPercentage"),
        )
        return jsonify(
            {
                "msg": f"Generated {result.generated} salary records for {result.month}/{result.year}",
                "generated": result.generated,
                "skipped": result.skipped,
                "details": [asdict(d) for d in result.details],
            }
        )

    @app.route("/api/admin/salaries/stats", methods=["GET"], endpoint="admin_salaries_stats")
    @admin_required
    @handles_errors("Failed to fetch salary statistics")
    def admin_salaries_stats():
        stats = payroll.stats(month=request.args.get("month"), year=request.args.get("year"))
        return jsonify(asdict(stats))

    @app.route("/api/admin/salaries/<int:salary_id>", methods=["PUT"], endpoint="admin_update_salary")
    @admin_required
    @handles_errors("Failed to update salary record")
    def admin_update_salary(salary_id: int):
        payroll.update_salary(salary_id, json_body())
        return jsonify({"msg": "Salary record updated successfully"})

    @app.route("/api/admin/salaries/<int:salary_id>", methods=["DELETE"], endpoint="admin_delete_salary")
    @admin_required
    @handles_errors("Failed to delete salary record")
    def admin_delete_salary(salary_id: int):
        payroll.delete_salary(salary_id)
        return jsonify({"msg": "Salary record deleted successfully"})

    @app.route("/api/admin/salaries/<int:salary_id>/payslip", methods=["GET"], endpoint="admin_payslip")
    @admin_required
    @handles_errors("Failed to fetch payslip")
    def admin_payslip(salary_id: int):
        return jsonify(payroll.payslip(salary_id))

    @app.route("/api/employee/salaries", methods=["GET"], endpoint="my_salaries")
    @employee_required
    @handles_errors("Failed to fetch salaries")
    def my_salaries():
        return jsonify(list(payroll.list_for_employee(current_user_id())))
