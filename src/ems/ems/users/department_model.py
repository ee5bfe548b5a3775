from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Department:
    id: int
    name: str


@dataclass(frozen=True)
class Position:
    id: int
    name: str
