from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used by the request guards."""

    ADMIN = "admin"
    STAFF = "staff"


class LoanStatus(str, Enum):
    """Loan lifecycle: ISSUED -> RETURNED (terminal)."""

    ISSUED = "ISSUED"
    RETURNED = "RETURNED"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
