from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a user account (admin or employee).

    Note: plain data object, no DB access code here.
    """

    id: int
    name: str
    email: str
    password_hash: str
    role: Role
    department_id: Optional[int] = None
    position_id: Optional[int] = None
    phone: Optional[str] = None
    photo: Optional[str] = None
    salary: Decimal = Decimal("0")

    def public_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "department_id": self.department_id,
            "position_id": self.position_id,
            "email": self.email,
            "phone": self.phone,
            "photo": self.photo,
        }


@dataclass(frozen=True)
class EmployeeInput:
    """Validated admin form for creating/updating an employee."""

    name: str
    email: str
    department_id: int
    position_id: int
    phone: Optional[str]
    photo: Optional[str]
    salary: Decimal
    password: Optional[str] = None
