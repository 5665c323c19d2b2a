"""
Employee API — Pydantic Schemas
================================

What:  Pydantic models defining both the HTTP contract and the on-disk record format.
How:   FastAPI uses these models to validate request bodies and serialize
       responses; EmployeeStore uses the same Employee model to read and
       write the JSON file, so both surfaces share one wire format.
Who:   Used by route handlers, EmployeeStore and the query filter.

Wire format:
    Attributes are snake_case in Python and camelCase on the wire
    (first_name ↔ firstName). Both spellings are accepted on input;
    output always uses the camelCase aliases.

    {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "dateOfBirth": "1815-12-10",
        "salary": 90000.0,
        "joinDate": null,
        "department": "Engineering",
        "id": 1
    }
"""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

# Calendar dates travel as yyyy-MM-dd strings
DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: Any) -> Any:
    """
    Parse a yyyy-MM-dd string into a date; other values pass through to pydantic.

    Raises ValueError for strings in any other layout (e.g. "10/12/1815").
    """
    if isinstance(value, str):
        if not _DATE_PATTERN.match(value):
            raise ValueError(f"Invalid date '{value}'. Expected format yyyy-MM-dd")
        return datetime.strptime(value, DATE_FORMAT).date()
    return value


# ══════════════════════════════════════════════════════════════════════════
# Employee Models: shared by HTTP layer and JSON storage
# ══════════════════════════════════════════════════════════════════════════


class EmployeeFields(BaseModel):
    """
    What:  The employee attributes a client supplies (everything except id).
    Who:   Base of EmployeeCreate (request body) and Employee (stored record).

    salary:
        Decimal with at most 6 integer and 3 fractional digits.
        Serialized as a JSON number, never as a string.
    """
    first_name: str = Field(alias="firstName", description="Given name")
    last_name: str = Field(alias="lastName", description="Family name")
    date_of_birth: Optional[date] = Field(
        default=None, alias="dateOfBirth", description="Date of birth (yyyy-MM-dd)"
    )
    salary: Optional[Decimal] = Field(
        default=None,
        max_digits=9,
        decimal_places=3,
        description="Salary, up to 6 integer and 3 fractional digits",
    )
    join_date: Optional[date] = Field(
        default=None, alias="joinDate", description="Date the employee joined (yyyy-MM-dd)"
    )
    department: str = Field(description="Department name")

    model_config = {"populate_by_name": True}

    @field_validator("date_of_birth", "join_date", mode="before")
    @classmethod
    def validate_date_format(cls, v: Any) -> Any:
        return parse_date(v)

    @field_serializer("salary", when_used="json")
    def serialize_salary(self, salary: Optional[Decimal]) -> Optional[float]:
        return float(salary) if salary is not None else None


class EmployeeCreate(EmployeeFields):
    """
    What:  Request body of POST /employees.
    Who:   Validated by FastAPI before EmployeeStore.create() runs.

    firstName, lastName and department must be present and non-blank
    (whitespace-only counts as blank). A client-sent "id" is ignored;
    the store assigns ids.
    """

    @field_validator("first_name", "last_name", "department")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    def to_employee(self, employee_id: int) -> "Employee":
        """Build the stored record for this payload with the assigned id."""
        return Employee(id=employee_id, **self.model_dump())


class Employee(EmployeeFields):
    """
    What:  One stored employee record.
    Who:   Held in EmployeeStore's in-memory sequence, written to the JSON
           file, and returned by GET /employees and GET /employees/{id}.

    id is assigned by the store: unique, starting at 1, never reused.
    Frozen so records handed out by the store cannot be altered in place.
    """
    id: int = Field(ge=1, description="Store-assigned identifier")

    model_config = {"frozen": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeCreatedResponse(BaseModel):
    """Body of a successful POST /employees (HTTP 201)."""
    id: int = Field(description="Identifier assigned to the new employee")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for 400/500 errors.

    Example:
        {
            "error": "validation_error",
            "message": "Request validation failed",
            "details": {"errors": [{"field": "body.firstName", "message": "..."}]},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health.

    status is "degraded" while the in-memory records diverge from the JSON file.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    storage: str = Field(description="JSON file state: persisted, degraded")
    employee_count: int = Field(description="Number of employee records held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
