from __future__ import annotations

from datetime import date

import pytest

from record_suite.container import build_container
from record_suite.core.enums import Role
from record_suite.database.tables import ALL_MAPPINGS
from record_suite.main import create_app
from record_suite.store.memory_store import InMemoryRecordStore


@pytest.fixture
def today() -> date:
    return date(2026, 2, 2)


@pytest.fixture
def store():
    return InMemoryRecordStore(ALL_MAPPINGS)


@pytest.fixture
def container(store):
    return build_container(store=store, loan_period_days=14)


@pytest.fixture
def library(container):
    return container.library_service


@pytest.fixture
def attendance(container):
    return container.attendance_service


@pytest.fixture
def employees(container):
    return container.employee_service


@pytest.fixture
def staff(employees):
    return employees.create_employee(
        full_name="Nguyen Van A",
        department="Engineering",
        username="nva",
        password="staff123",
        role=Role.STAFF,
    )


@pytest.fixture
def app():
    app = create_app("record_suite.config.testing")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    return client
