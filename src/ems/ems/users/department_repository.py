from __future__ import annotations

from typing import Protocol, Sequence

from .department_model import Department, Position


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def create(self, *, name: str) -> int:
        raise NotImplementedError

    def delete_by_id(self, dept_id: int) -> bool:
        raise NotImplementedError


class PositionRepository(Protocol):
    def list_all(self) -> Sequence[Position]:
        raise NotImplementedError

    def create(self, *, name: str) -> int:
        raise NotImplementedError

    def delete_by_id(self, position_id: int) -> bool:
        raise NotImplementedError
