from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..attendance.model import AttendanceRecord, Employee
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from ..store.predicates import Equals
from ..store.repository import RecordStore


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    employee_id: int
    full_name: str
    role: Role
    department: str


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, store: RecordStore):
        self._store = store

    def authenticate(self, username: str, password: str) -> SessionUser:
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid username or password")

        matches = self._store.find_where(Employee, Equals("username", username.strip().lower()))
        employee = matches[0] if matches else None
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(employee.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(
            employee_id=int(employee.id),
            full_name=employee.full_name,
            role=employee.role,
            department=employee.department,
        )


class EmployeeService:
    """Use case: manage employee accounts (admin)."""

    def __init__(self, store: RecordStore):
        self._store = store

    def create_employee(
        self,
        *,
        full_name: str,
        department: str,
        username: str,
        password: str,
        role: Role = Role.STAFF,
    ) -> Employee:
        full_name = require_non_empty(full_name, "full_name")
        department = require_non_empty(department, "department")
        username = require_non_empty(username, "username").lower()
        require_min_length(password, "password", MIN_PASSWORD_LENGTH)
        if not isinstance(role, Role):
            try:
                role = Role(str(role).lower())
            except ValueError:
                raise ValidationError(f"Invalid role {role!r}")

        with self._store.transaction() as store:
            if store.find_where(Employee, Equals("username", username)):
                raise ConflictError("Username already exists")
            return store.save(
                Employee,
                Employee(
                    full_name=full_name,
                    department=department,
                    username=username,
                    password_hash=generate_password_hash(password),
                    role=role,
                ),
            )

    def get_employee(self, employee_id: int) -> Employee:
        return self._store.require(Employee, employee_id)

    def list_employees(self) -> Sequence[Employee]:
        return self._store.find_all(Employee)

    def delete_employee(self, *, current_role: Role, employee_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        employee = self._store.require(Employee, employee_id)
        if employee.role == Role.ADMIN:
            raise ConflictError("Admin accounts cannot be deleted")

        with self._store.transaction() as store:
            if store.find_where(AttendanceRecord, Equals("employee_id", int(employee_id))):
                raise ConflictError("Employee has attendance history and cannot be deleted")
            store.delete(Employee, employee_id)

    def ensure_admin(self, *, username: str, password: str) -> Employee:
        """Create the admin account if it does not exist yet (idempotent)."""

        existing = self._store.find_where(Employee, Equals("username", require_non_empty(username, "username").lower()))
        if existing:
            return existing[0]
        return self.create_employee(
            full_name="Administrator",
            department="Administration",
            username=username,
            password=password,
            role=Role.ADMIN,
        )
