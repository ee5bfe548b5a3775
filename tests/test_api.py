from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask, session

from src.ems.ems.attendance.controller import register as register_attendance
from src.ems.ems.attendance.service import AttendanceService
from src.ems.ems.common.web import require_role
from src.ems.ems.core.enums import Role, SalaryStatus
from src.ems.ems.core.exceptions import AuthorizationError
from src.ems.ems.dashboard.controller import register as register_dashboard
from src.ems.ems.dashboard.service import DashboardService
from src.ems.ems.leaves.controller import register as register_leaves
from src.ems.ems.leaves.service import LeaveService
from src.ems.ems.main import EMSJSONProvider
from src.ems.ems.payroll.controller import register as register_payroll
from src.ems.ems.payroll.service import PayrollService
from tests.fakes import InMemoryAttendance, InMemoryLeaves, InMemorySalaries, InMemoryUsers, make_employee


@pytest.fixture()
def env():
    users = InMemoryUsers([make_employee(1, "Sita", 750000), make_employee(2, "Ram", 450000)])
    salaries = InMemorySalaries()
    attendance = InMemoryAttendance()
    leaves = InMemoryLeaves()
    attendance_service = AttendanceService(attendance)
    container = SimpleNamespace(
        payroll_service=PayrollService(salaries, users),
        attendance_service=attendance_service,
        leave_service=LeaveService(leaves),
        dashboard_service=DashboardService(attendance, leaves, salaries, attendance_service),
    )

    app = Flask(__name__)
    app.json = EMSJSONProvider(app)
    app.secret_key = "test"
    app.config["TESTING"] = True
    register_payroll(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_dashboard(app, container)
    return SimpleNamespace(app=app, client=app.test_client(), salaries=salaries)


def _login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_admin_routes_require_login(env):
    resp = env.client.get("/api/admin/salaries")

    assert resp.status_code == 401
    assert resp.get_json() == {"msg": "Authentication required"}


def test_employee_cannot_use_admin_routes(env):
    _login(env.client, 1, "employee")

    resp = env.client.post("/api/admin/salaries/bulk-generate", json={"month": "May", "year": 2025})

    assert resp.status_code == 403
    assert resp.get_json() == {"msg": "Access denied"}
    assert env.salaries.records == {}


def test_create_salary_returns_snapshot(env):
    _login(env.client, 99, "admin")

    resp = env.client.post("/api/admin/salaries", json={"user_id": 1, "month": "May", "year": 2025})

    assert resp.status_code == 200
    assert resp.get_json() == {"msg": "Salary record added successfully", "basic": 750000.0, "deductions": 35000.0}


def test_duplicate_salary_is_a_client_error(env):
    _login(env.client, 99, "admin")
    env.client.post("/api/admin/salaries", json={"user_id": 1, "month": "May", "year": 2025})

    resp = env.client.post("/api/admin/salaries", json={"user_id": 1, "month": "May", "year": 2025})

    assert resp.status_code == 400
    assert "already exists" in resp.get_json()["msg"]


def test_unknown_employee_is_404(env):
    _login(env.client, 99, "admin")

    resp = env.client.post("/api/admin/salaries", json={"user_id": 5, "month": "May", "year": 2025})

    assert resp.status_code == 404
    assert resp.get_json() == {"msg": "Employee not found"}


def test_bulk_generate_then_stats(env):
    _login(env.client, 99, "admin")

    resp = env.client.post(
        "/api/admin/salaries/bulk-generate",
        json={"month": "June", "year": 2025, "bonusPercentage": 10},
    )
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["generated"] == 2
    assert body["skipped"] == 0
    assert body["details"][0] == {"name": "Sita", "basic": 750000.0, "bonus": 75000.0, "deductions": 35000.0}

    again = env.client.post("/api/admin/salaries/bulk-generate", json={"month": "June", "year": 2025})
    assert again.status_code == 400

    stats = env.client.get("/api/admin/salaries/stats?month=June&year=2025").get_json()
    assert stats["total_records"] == 2
    assert stats["unpaid_count"] == 2
    assert stats["total_amount"] == stats["unpaid_amount"]


def test_bulk_status(env):
    _login(env.client, 99, "admin")
    sid = env.salaries.add(user_id=1, month="May", year=2025, basic=1000)

    resp = env.client.put("/api/admin/salaries/bulk-status", json={"salary_ids": [sid, 77], "status": "PAID"})

    assert resp.get_json()["updated"] == 1
    assert env.salaries.get_by_id(sid).status == SalaryStatus.PAID


def test_bulk_status_requires_ids(env):
    _login(env.client, 99, "admin")

    resp = env.client.put("/api/admin/salaries/bulk-status", json={"salary_ids": [], "status": "paid"})

    assert resp.status_code == 400


def test_employee_sees_own_salaries_only(env):
    env.salaries.add(user_id=1, month="May", year=2025, basic=1000)
    env.salaries.add(user_id=2, month="May", year=2025, basic=2000)
    _login(env.client, 2, "employee")

    rows = env.client.get("/api/employee/salaries").get_json()

    assert [r["basic"] for r in rows] == [2000.0]


def test_checkin_flow_and_dashboard(env):
    _login(env.client, 1, "employee")

    assert env.client.post("/api/employee/checkin").status_code == 200
    second = env.client.post("/api/employee/checkin")
    assert second.status_code == 400
    assert second.get_json() == {"msg": "Already checked in today"}

    dashboard = env.client.get("/api/employee/dashboard").get_json()
    assert dashboard["presentDays"] == 1
    assert dashboard["todayStatus"] == {"checkedIn": True, "checkedOut": False}


def test_leave_apply_and_list(env):
    _login(env.client, 1, "employee")

    resp = env.client.post(
        "/api/employee/leaves",
        json={"start_date": "2025-04-01", "end_date": "2025-04-02", "reason": "Festival"},
    )
    assert resp.get_json() == {"msg": "Leave applied"}

    rows = env.client.get("/api/employee/leaves").get_json()
    assert rows[0]["start_date"] == "2025-04-01"
    assert rows[0]["status"] == "pending"


def test_require_role_raises_authorization_error(env):
    with env.app.test_request_context():
        session["role"] = "employee"
        require_role(Role.EMPLOYEE)
        with pytest.raises(AuthorizationError) as excinfo:
            require_role(Role.ADMIN)

    assert excinfo.value.status_code == 403
