from __future__ import annotations

from functools import wraps

from flask import session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError


def current_employee_id() -> int:
    if "employee_id" not in session:
        raise AuthenticationError("Please log in to continue")
    return int(session["employee_id"])


def current_role() -> Role:
    current_employee_id()
    return Role(session.get("role", Role.STAFF.value))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_employee_id()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_role() != Role.ADMIN:
            raise AuthorizationError("Admin role required")
        return view(*args, **kwargs)

    return wrapper
