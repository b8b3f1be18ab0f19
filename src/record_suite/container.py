from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .accounts.service import AuthService, EmployeeService
from .attendance.service import AttendanceService
from .catalog.service import ProductService
from .core.constants import DEFAULT_LOAN_PERIOD_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .database.tables import ALL_MAPPINGS
from .library.service import LibraryService
from .store.memory_store import InMemoryRecordStore
from .store.mysql_store import MySQLRecordStore
from .store.repository import RecordStore
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    store: RecordStore
    conn: Optional[DatabaseConnection]

    auth_service: AuthService
    employee_service: EmployeeService
    product_service: ProductService
    library_service: LibraryService
    student_service: StudentService
    attendance_service: AttendanceService


def build_store(*, backend: str, db_config: Optional[Mapping[str, Any]] = None):
    """Return ``(store, conn_factory)`` for the configured backend."""

    backend = (backend or "mysql").lower()
    if backend == "memory":
        return InMemoryRecordStore(ALL_MAPPINGS), None
    if backend == "mysql":
        if db_config is None:
            raise ValueError("DB_CONFIG is required for the mysql backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        return MySQLRecordStore(conn, ALL_MAPPINGS), conn
    raise ValueError(f"Unknown STORE_BACKEND {backend!r}")


def build_container(
    *,
    store: RecordStore,
    conn: Optional[DatabaseConnection] = None,
    loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS,
) -> Container:
    return Container(
        store=store,
        conn=conn,
        auth_service=AuthService(store),
        employee_service=EmployeeService(store),
        product_service=ProductService(store),
        library_service=LibraryService(store, loan_period_days=loan_period_days),
        student_service=StudentService(store),
        attendance_service=AttendanceService(store),
    )
