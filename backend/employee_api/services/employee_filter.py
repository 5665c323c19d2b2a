"""
Employee API — Employee Query Filter
=====================================

What:  Pure predicate deciding whether an employee matches the list criteria.
Who:   Called by EmployeeStore.list() for GET /employees?name=&fromSalary=&toSalary=.

Criteria (each optional, combined with AND):
    name_filter:  case-insensitive substring of first_name OR last_name
    min_salary:   salary >= min_salary
    max_salary:   salary <= max_salary

An employee without a salary never satisfies a supplied salary bound.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Union

from employee_api.schemas.employee import Employee

Number = Union[Decimal, int, float]


def _matches_name(employee: Employee, name_filter: Optional[str]) -> bool:
    if name_filter is None:
        return True
    needle = name_filter.casefold()
    return needle in employee.first_name.casefold() or needle in employee.last_name.casefold()


def matches_filter(
    employee: Employee,
    name_filter: Optional[str] = None,
    min_salary: Optional[Number] = None,
    max_salary: Optional[Number] = None,
) -> bool:
    """
    Evaluate one employee against the three optional criteria.

    Returns:
        True when every supplied criterion holds; True when none is supplied.
    """
    if not _matches_name(employee, name_filter):
        return False

    if min_salary is None and max_salary is None:
        return True

    # A salary bound was supplied; a record without salary cannot be placed in range
    if employee.salary is None:
        return False
    if min_salary is not None and employee.salary < min_salary:
        return False
    if max_salary is not None and employee.salary > max_salary:
        return False
    return True


def filter_employees(
    employees: Iterable[Employee],
    name_filter: Optional[str] = None,
    min_salary: Optional[Number] = None,
    max_salary: Optional[Number] = None,
) -> List[Employee]:
    """Return the matching employees, preserving the input order."""
    return [
        employee
        for employee in employees
        if matches_filter(employee, name_filter, min_salary, max_salary)
    ]
