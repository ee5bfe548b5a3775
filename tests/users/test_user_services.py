from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest
from werkzeug.security import check_password_hash, generate_password_hash

from src.ems.ems.core.enums import Role
from src.ems.ems.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.ems.ems.users.service import AuthService, EmployeeService, OrganizationService
from tests.fakes import InMemoryUsers, make_employee


def _form(**overrides):
    form = {
        "name": "Gita Rai",
        "email": "Gita@Example.com",
        "password": "secret1",
        "department_id": "1",
        "position_id": "2",
        "salary": "600000",
    }
    form.update(overrides)
    return form


def _user_with_password(password: str):
    user = make_employee(1, "Sita", 1000, email="sita@ems.local")
    return replace(user, password_hash=generate_password_hash(password))


def test_login_success_returns_session_data():
    svc = AuthService(InMemoryUsers([_user_with_password("employee123")]))

    su = svc.authenticate(" sita@ems.local ", "employee123")

    assert su.user_id == 1
    assert su.role == Role.EMPLOYEE
    assert su.user["email"] == "sita@ems.local"
    assert "password_hash" not in su.user


def test_login_unknown_email():
    svc = AuthService(InMemoryUsers())

    with pytest.raises(AuthenticationError, match="User not found"):
        svc.authenticate("nobody@ems.local", "x")


def test_login_wrong_password():
    svc = AuthService(InMemoryUsers([_user_with_password("employee123")]))

    with pytest.raises(AuthenticationError, match="Invalid password"):
        svc.authenticate("sita@ems.local", "wrong")


def test_login_with_unusable_hash_is_rejected():
    svc = AuthService(InMemoryUsers([make_employee(1, "Sita", 1000, email="sita@ems.local")]))

    with pytest.raises(AuthenticationError):
        svc.authenticate("sita@ems.local", "x")


def test_create_employee_hashes_password_and_lowercases_email():
    users = InMemoryUsers()
    svc = EmployeeService(users)

    uid = svc.create_employee(_form())

    created = users.get_by_id(uid)
    assert created.email == "gita@example.com"
    assert created.salary == Decimal(600000)
    assert created.role == Role.EMPLOYEE
    assert check_password_hash(created.password_hash, "secret1")


def test_create_employee_duplicate_email():
    users = InMemoryUsers([make_employee(1, "Gita", 1, email="gita@example.com")])

    with pytest.raises(ConflictError):
        EmployeeService(users).create_employee(_form())


@pytest.mark.parametrize("field", ["name", "email", "password", "department_id", "position_id"])
def test_create_employee_requires_fields(field):
    with pytest.raises(ValidationError):
        EmployeeService(InMemoryUsers()).create_employee(_form(**{field: ""}))


def test_create_employee_short_password():
    with pytest.raises(ValidationError):
        EmployeeService(InMemoryUsers()).create_employee(_form(password="abc"))


def test_update_employee_keeps_password_when_blank():
    users = InMemoryUsers()
    svc = EmployeeService(users)
    uid = svc.create_employee(_form())
    old_hash = users.get_by_id(uid).password_hash

    svc.update_employee(uid, _form(password="", salary="700000"))

    assert users.get_by_id(uid).password_hash == old_hash
    assert users.get_by_id(uid).salary == Decimal(700000)


def test_update_employee_email_taken_by_other():
    users = InMemoryUsers([make_employee(1, "Sita", 1, email="sita@ems.local"), make_employee(2, "Ram", 1)])

    with pytest.raises(ConflictError):
        EmployeeService(users).update_employee(2, _form(email="sita@ems.local", password=""))


def test_delete_employee_blocked_by_linked_records():
    users = InMemoryUsers([make_employee(1, "Sita", 1)])
    users.linked[1] = {"salaries": 2, "leaves": 0, "attendance": 0}

    with pytest.raises(ValidationError, match="salary"):
        EmployeeService(users).delete_employee(1)
    assert users.get_by_id(1) is not None


def test_delete_employee():
    users = InMemoryUsers([make_employee(1, "Sita", 1)])

    EmployeeService(users).delete_employee(1)

    assert users.get_by_id(1) is None


def test_delete_refuses_admin_accounts():
    users = InMemoryUsers([make_employee(1, "Boss", 1, role=Role.ADMIN)])

    with pytest.raises(NotFoundError):
        EmployeeService(users).delete_employee(1)


def test_reset_password_checks_current_password():
    users = InMemoryUsers([_user_with_password("employee123")])
    svc = EmployeeService(users)

    with pytest.raises(ValidationError, match="incorrect"):
        svc.reset_password(1, current_password="nope", new_password="newpass1")

    svc.reset_password(1, current_password="employee123", new_password="newpass1")
    assert check_password_hash(users.get_by_id(1).password_hash, "newpass1")


def test_reset_password_too_short():
    svc = EmployeeService(InMemoryUsers([_user_with_password("employee123")]))

    with pytest.raises(ValidationError):
        svc.reset_password(1, current_password=None, new_password="123")


def test_update_profile_requires_name():
    svc = EmployeeService(InMemoryUsers([make_employee(1, "Sita", 1)]))

    with pytest.raises(ValidationError):
        svc.update_profile(1, name=" ", phone=None, photo=None)


class _Catalogue:
    def __init__(self):
        self.names: list[str] = []

    def list_all(self):
        return list(self.names)

    def create(self, *, name):
        self.names.append(name)
        return len(self.names)

    def delete_by_id(self, item_id):
        return True


def test_organization_trims_names_and_requires_them():
    departments, positions = _Catalogue(), _Catalogue()
    svc = OrganizationService(departments, positions)

    svc.add_department("  Finance ")
    svc.add_position("Analyst")

    assert departments.names == ["Finance"]
    assert positions.names == ["Analyst"]
    with pytest.raises(ValidationError):
        svc.add_department("")
    with pytest.raises(ValidationError):
        svc.add_position(None)
