from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import coerce_amount, require_int, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .department_model import Department, Position
from .department_repository import DepartmentRepository, PositionRepository
from .model import EmployeeInput, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    role: Role
    user: dict


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip()
        user = self._users.get_by_email(email) if email else None
        if not user:
            raise AuthenticationError("User not found")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid password")

        logger.info("User %s logged in as %s", user.id, user.role.value)
        return SessionUser(user_id=user.id, role=user.role, user=user.public_dict())


class EmployeeService:
    """Use case: manage employees (admin) and self-service profile (employee)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _parse_form(form: dict[str, Any], *, password_required: bool) -> EmployeeInput:
        required = ["name", "email", "department_id", "position_id"]
        if password_required:
            required.insert(2, "password")
        missing = [f for f in required if not form.get(f)]
        if missing:
            raise ValidationError(
                "Please provide all required fields (name, email, "
                + ("password, " if password_required else "")
                + "department, position)"
            )

        password = form.get("password") or None
        if password is not None and password.strip() == "":
            password = None
        if password is not None:
            require_min_length(password, "password", MIN_PASSWORD_LENGTH)

        return EmployeeInput(
            name=require_non_empty(form.get("name"), "name"),
            email=require_non_empty(form.get("email"), "email").lower(),
            department_id=require_int(form.get("department_id"), "department_id"),
            position_id=require_int(form.get("position_id"), "position_id"),
            phone=form.get("phone") or None,
            photo=form.get("photo") or None,
            salary=coerce_amount(form.get("salary")),
            password=password,
        )

    def list_employees(self) -> Sequence[dict]:
        return self._users.list_admin_view()

    def create_employee(self, form: dict[str, Any]) -> int:
        data = self._parse_form(form, password_required=True)
        if self._users.email_taken(data.email):
            raise ConflictError("Email already exists")

        user_id = self._users.create_employee(data, password_hash=generate_password_hash(data.password))
        logger.info("Created employee %s (%s)", user_id, data.email)
        return user_id

    def update_employee(self, user_id: int, form: dict[str, Any]) -> None:
        data = self._parse_form(form, password_required=False)
        if not self._users.get_by_id(user_id):
            raise NotFoundError("Employee not found")
        if self._users.email_taken(data.email, exclude_id=user_id):
            raise ConflictError("Email already exists for another user")

        password_hash = generate_password_hash(data.password) if data.password else None
        self._users.update_employee(user_id, data, password_hash=password_hash)

    def delete_employee(self, user_id: int) -> None:
        user = self._users.get_by_id(user_id)
        if not user or user.role != Role.EMPLOYEE:
            raise NotFoundError("Employee not found")

        linked = self._users.count_linked_records(user_id)
        labels = {"salaries": "salary", "leaves": "leave", "attendance": "attendance"}
        for table, label in labels.items():
            if linked.get(table):
                raise ValidationError(f"Cannot delete employee with existing {label} records")

        self._users.delete_by_id(user_id)
        logger.info("Deleted employee %s", user_id)

    def get_profile(self, user_id: int) -> dict:
        profile = self._users.get_profile(user_id)
        if not profile:
            raise NotFoundError("User not found")
        return profile

    def update_profile(self, user_id: int, *, name: Optional[str], phone: Optional[str], photo: Optional[str]) -> None:
        self._users.update_profile(
            user_id,
            name=require_non_empty(name, "name"),
            phone=phone or None,
            photo=photo or None,
        )

    def reset_password(self, user_id: int, *, current_password: Optional[str], new_password: Optional[str]) -> None:
        if not new_password:
            raise ValidationError("New password is required")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        user: Optional[User] = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        if current_password and not check_password_hash(user.password_hash, current_password):
            raise ValidationError("Current password is incorrect")

        self._users.update_password(user_id, password_hash=generate_password_hash(new_password))


class OrganizationService:
    """Departments and positions catalogue (admin)."""

    def __init__(self, departments: DepartmentRepository, positions: PositionRepository):
        self._departments = departments
        self._positions = positions

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()

    def add_department(self, name: Optional[str]) -> int:
        if not name or not name.strip():
            raise ValidationError("Department name is required")
        return self._departments.create(name=name.strip())

    def delete_department(self, dept_id: int) -> None:
        self._departments.delete_by_id(dept_id)

    def list_positions(self) -> Sequence[Position]:
        return self._positions.list_all()

    def add_position(self, name: Optional[str]) -> int:
        if not name or not name.strip():
            raise ValidationError("Position name is required")
        return self._positions.create(name=name.strip())

    def delete_position(self, position_id: int) -> None:
        self._positions.delete_by_id(position_id)
