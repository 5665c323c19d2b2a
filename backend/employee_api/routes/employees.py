"""
Employee API — Employee Route Handlers
=======================================

What:  Handles GET /employees (filtered list), GET /employees/{id} (detail)
       and POST /employees (create).
How:   Extracts path/query/body data, delegates to the injected EmployeeStore,
       returns JSON. Input validation happens in the pydantic schemas before
       the store is called; invalid input becomes HTTP 400 (see main.py).
Who:   Called by API clients.
"""

import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Query

from employee_api.exceptions import NotFoundError
from employee_api.schemas.employee import (
    Employee,
    EmployeeCreate,
    EmployeeCreatedResponse,
    ErrorResponse,
)
from employee_api.services.employee_store import EmployeeStore, get_employee_store

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get(
    "",
    response_model=List[Employee],
    responses={
        200: {"description": "Employees matching every supplied filter"},
        400: {"description": "Malformed salary bound", "model": ErrorResponse},
    },
    summary="List employees with optional filters",
    description=(
        "Returns every employee in creation order. `name` matches first or last "
        "name case-insensitively; `fromSalary`/`toSalary` bound the salary "
        "(inclusive). Employees without a salary are excluded when a bound is given."
    ),
)
async def list_employees(
    name: str | None = Query(
        default=None,
        description="Case-insensitive substring of first or last name",
    ),
    from_salary: Decimal | None = Query(
        default=None,
        alias="fromSalary",
        description="Minimum salary (inclusive)",
    ),
    to_salary: Decimal | None = Query(
        default=None,
        alias="toSalary",
        description="Maximum salary (inclusive)",
    ),
    store: EmployeeStore = Depends(get_employee_store),
) -> List[Employee]:
    """
    List employees matching the optional filters.

    Example:
        GET /employees?name=smith&fromSalary=50000&toSalary=80000
    """
    return await store.list_employees(
        name_filter=name,
        min_salary=from_salary,
        max_salary=to_salary,
    )


@router.get(
    "/{employee_id}",
    response_model=Employee,
    responses={
        200: {"description": "The employee record", "model": Employee},
        400: {"description": "Non-integer id", "model": ErrorResponse},
        404: {"description": "No employee with this id (empty body)"},
    },
    summary="Get a single employee by ID",
)
async def get_employee(
    employee_id: int,
    store: EmployeeStore = Depends(get_employee_store),
) -> Employee:
    """Return one employee; unknown ids (0, negative, never assigned) give 404."""
    employee = await store.find_by_id(employee_id)

    if employee is None:
        raise NotFoundError(resource="employee", resource_id=str(employee_id))

    return employee


@router.post(
    "",
    status_code=201,
    response_model=EmployeeCreatedResponse,
    responses={
        201: {"description": "Employee created", "model": EmployeeCreatedResponse},
        400: {"description": "Missing, blank or malformed field", "model": ErrorResponse},
    },
    summary="Create an employee",
    description=(
        "Creates an employee from `{firstName, lastName, dateOfBirth?, salary?, "
        "joinDate?, department}` and returns the assigned id. Dates use yyyy-MM-dd."
    ),
)
async def create_employee(
    payload: EmployeeCreate,
    store: EmployeeStore = Depends(get_employee_store),
) -> EmployeeCreatedResponse:
    """
    Create an employee.

    Persistence is best-effort: if the JSON file cannot be written the
    employee still exists in memory and the request still succeeds
    (the store logs a warning and /health reports "degraded").
    """
    result = await store.create(payload)
    if not result.persisted:
        logger.warning(
            "Employee %d accepted but held in memory only (%s not updated)",
            result.employee.id,
            store.storage_path,
        )
    return EmployeeCreatedResponse(id=result.employee.id)
