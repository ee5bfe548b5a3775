from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeInput, User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def email_taken(self, email: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def list_employees(self) -> Sequence[User]:
        """Roster read used by payroll generation."""

        raise NotImplementedError

    def list_admin_view(self) -> Sequence[dict]:
        raise NotImplementedError

    def get_profile(self, user_id: int) -> Optional[dict]:
        raise NotImplementedError

    def create_employee(self, data: EmployeeInput, *, password_hash: str) -> int:
        raise NotImplementedError

    def update_employee(self, user_id: int, data: EmployeeInput, *, password_hash: Optional[str] = None) -> bool:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, phone: Optional[str], photo: Optional[str]) -> bool:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def count_linked_records(self, user_id: int) -> dict[str, int]:
        """Counts of salary, leave and attendance rows owned by the user."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
