from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee, also the login account of the suite.

    Note: This is a plain data object (no DB access code).
    """

    full_name: str
    department: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
    id: Optional[int] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark per employee per day, never updated."""

    employee_id: int
    work_date: date
    status: AttendanceStatus
    id: Optional[int] = None
