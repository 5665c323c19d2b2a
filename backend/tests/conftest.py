"""
Employee API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── storage_path: JSON file location inside pytest's tmp_path (not yet created)
    ├── store: EmployeeStore initialized against storage_path
    ├── ada_payload: camelCase request body for the canonical employee
    ├── make_employee: factory for Employee records (filter tests)
    └── test_client: HTTPX AsyncClient wired to a fresh app using `store`
"""

import os
import tempfile
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any employee_api imports
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="employee_api_test_")
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from employee_api.schemas.employee import Employee  # noqa: E402
from employee_api.services.employee_store import EmployeeStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def storage_path(tmp_path):
    """
    Location of the employees JSON file for one test.

    The "data" directory does not exist yet, so initialize() has to create it.
    """
    return tmp_path / "data" / "employees.json"


@pytest_asyncio.fixture
async def store(storage_path):
    """An EmployeeStore that has already created and loaded an empty file."""
    employee_store = EmployeeStore(storage_path)
    await employee_store.initialize()
    return employee_store


@pytest.fixture
def ada_payload():
    """Request body for the canonical example employee."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "department": "Engineering",
        "salary": 90000,
    }


@pytest.fixture
def make_employee():
    """
    Factory for Employee records.

    Usage:
        def test_x(make_employee):
            employee = make_employee(1, "John", "Smith", salary="55000")
    """
    def _make(employee_id, first_name, last_name, salary=None, department="Engineering"):
        return Employee(
            id=employee_id,
            first_name=first_name,
            last_name=last_name,
            salary=Decimal(salary) if salary is not None else None,
            department=department,
        )

    return _make


@pytest_asyncio.fixture
async def test_client(store):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the fixture attaches
    `store` to app.state the way the lifespan would.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from employee_api.main import create_app

    app = create_app()
    app.state.employee_store = store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
