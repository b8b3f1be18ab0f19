from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from loguru import logger

from ..common.datetime_utils import today_local
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, ValidationError
from ..store.predicates import All, Equals, In
from ..store.repository import RecordStore
from .model import AttendanceRecord, Employee


class AttendanceService:
    """Use case: mark daily attendance.

    At most one record exists per (employee, date). The employee row is read
    ``for_update`` so concurrent marks for the same employee serialize on it;
    the store's unique key on (employee_id, work_date) backs the check up.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    def mark_attendance(
        self,
        employee_id: int,
        status: AttendanceStatus,
        *,
        work_date: Optional[date] = None,
    ) -> AttendanceRecord:
        if not isinstance(status, AttendanceStatus):
            try:
                status = AttendanceStatus(str(status).upper())
            except ValueError:
                raise ValidationError(f"Invalid attendance status {status!r}")
        work_date = work_date or today_local()

        with self._store.transaction() as store:
            store.require(Employee, employee_id, for_update=True)

            existing = store.find_where(
                AttendanceRecord,
                All(Equals("employee_id", int(employee_id)), Equals("work_date", work_date)),
            )
            if existing:
                logger.warning("Attendance already marked for employee {} on {}", employee_id, work_date)
                raise ConflictError("Attendance already marked for this day")

            record = store.save(
                AttendanceRecord,
                AttendanceRecord(employee_id=int(employee_id), work_date=work_date, status=status),
            )

        logger.info("Employee {} marked {} on {}", employee_id, status.value, work_date)
        return record

    def attendance_for_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        self._store.require(Employee, employee_id)
        return self._store.find_where(AttendanceRecord, Equals("employee_id", int(employee_id)))

    def attendance_for_department(self, department: str) -> Sequence[AttendanceRecord]:
        department = require_non_empty(department, "department")
        employees = self._store.find_where(Employee, Equals("department", department, ignore_case=True))
        if not employees:
            return []
        return self._store.find_where(AttendanceRecord, In("employee_id", tuple(e.id for e in employees)))
