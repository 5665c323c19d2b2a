"""
Employee API — Employee Store (JSON-backed repository)
=======================================================

What:  Single source of truth for employee records, mirrored to a JSON file.
How:   Holds an ordered in-memory list of Employee records; every create
       rewrites the whole list to disk. All reads and writes go through one
       asyncio.Lock owned by the store instance.
Who:   Created once in the application lifespan (main.py), stored on
       app.state, and injected into route handlers via get_employee_store().
When:  initialize() at startup; create/find_by_id/list_employees per request.

Lifecycle:
    1. initialize(): create parent directory + "[]" file if missing, load records
    2. create():     assign id = count + 1, append, rewrite file
    3. process exit: nothing to flush (file already reflects the last write)

Failure Model (best-effort persistence):
    ┌──────────────┐  OSError / bad JSON   ┌─────────────────┐
    │ file I/O     │──────────────────────▶│ StorageIOError  │
    └──────────────┘                       └────────┬────────┘
                                                    │ caught at operation boundary
                                                    ▼
                                 logged, store.degraded = True, keep serving from memory

    A failed write never fails the request: create() still returns the new
    employee, with CreateResult.persisted = False. The next successful write
    rewrites the whole list and clears the degraded flag.

File Layout:
    [
      {"firstName": "Ada", "lastName": "Lovelace", "dateOfBirth": null,
       "salary": 90000.0, "joinDate": null, "department": "Engineering", "id": 1}
    ]
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Union

import aiofiles
from fastapi import Request
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from employee_api.config import settings
from employee_api.exceptions import StorageIOError
from employee_api.schemas.employee import Employee, EmployeeCreate
from employee_api.services.employee_filter import filter_employees

logger = logging.getLogger(__name__)

# Parses and serializes the whole file (a JSON array of Employee objects)
_EMPLOYEE_LIST = TypeAdapter(List[Employee])

EMPTY_FILE_CONTENT = "[]"


@dataclass(frozen=True)
class CreateResult:
    """
    Outcome of EmployeeStore.create().

    Attributes:
        employee:   The stored record, carrying its assigned id
        persisted:  False when the JSON file could not be rewritten
                    (the record exists in memory only)
    """
    employee: Employee
    persisted: bool


class EmployeeStore:
    """
    In-memory employee collection with a JSON file mirror.

    Invariants:
        - ids are unique, start at 1 and equal count-before-insert + 1
        - list order is insertion order
        - after a successful write the file holds exactly the in-memory list

    Concurrency:
        Single process, one asyncio task per request. self._lock serializes
        id assignment, append and file write, and gives readers a consistent
        snapshot. Not safe across multiple worker processes.
    """

    def __init__(self, storage_path: Optional[Union[str, Path]] = None):
        """
        Args:
            storage_path: Override the JSON file location (used in tests).
                          If None, uses settings.storage_path.
        """
        self.storage_path = Path(storage_path or settings.storage_path)
        self._employees: List[Employee] = []
        self._lock = asyncio.Lock()
        self._degraded = False

    @property
    def count(self) -> int:
        """Number of records currently held in memory."""
        return len(self._employees)

    @property
    def degraded(self) -> bool:
        """True while the in-memory records diverge from the JSON file."""
        return self._degraded

    # ── Public Operations ─────────────────────────────────────────────────

    async def initialize(self) -> bool:
        """
        Ensure the storage file exists and load every record into memory.

        What:    Creates the parent directory (recursively) and an empty "[]"
                 file when missing, then parses the file into Employee records.
        When:    Once, during application startup.

        Returns:
            True if records were loaded from disk, False if the store fell back
            to an empty in-memory set because of a storage error.
        """
        async with self._lock:
            try:
                await self._ensure_storage_file()
                employees = await self._read_employees()
            except StorageIOError as e:
                self._employees = []
                self._degraded = True
                logger.error(
                    "Could not load employees from %s, starting empty: %s | Context: %s",
                    self.storage_path,
                    e.message,
                    e.context,
                )
                return False

            self._employees = employees
            self._degraded = False
            logger.info("Loaded %d employees from %s", len(employees), self.storage_path)
            return True

    async def create(self, payload: EmployeeCreate) -> CreateResult:
        """
        Store a new employee and rewrite the JSON file.

        Args:
            payload: Validated request body (no id)

        Returns:
            CreateResult with the stored employee and whether it reached disk.
        """
        async with self._lock:
            employee = payload.to_employee(self._next_id())
            self._employees.append(employee)
            persisted = await self._persist()

        logger.info(
            "Employee %d created (persisted=%s)",
            employee.id,
            persisted,
        )
        return CreateResult(employee=employee, persisted=persisted)

    async def find_by_id(self, employee_id: int) -> Optional[Employee]:
        """Return the employee with this id, or None when it was never assigned."""
        async with self._lock:
            for employee in self._employees:
                if employee.id == employee_id:
                    return employee
        return None

    async def list_employees(
        self,
        name_filter: Optional[str] = None,
        min_salary: Optional[Decimal] = None,
        max_salary: Optional[Decimal] = None,
    ) -> List[Employee]:
        """
        Return the employees matching all supplied criteria, in insertion order.

        See employee_filter.matches_filter for the criteria semantics.
        The returned list is a new list; mutating it does not affect the store.
        """
        async with self._lock:
            return filter_employees(self._employees, name_filter, min_salary, max_salary)

    # ── Internals (caller holds self._lock) ───────────────────────────────

    def _next_id(self) -> int:
        return len(self._employees) + 1

    async def _persist(self) -> bool:
        """Rewrite the file; on failure log, mark degraded and return False."""
        try:
            await self._write_employees()
        except StorageIOError as e:
            self._degraded = True
            logger.warning(
                "Employee file %s not updated, serving %d records from memory: %s | Context: %s",
                self.storage_path,
                len(self._employees),
                e.message,
                e.context,
            )
            return False

        self._degraded = False
        return True

    async def _ensure_storage_file(self) -> None:
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            if not self.storage_path.exists():
                async with aiofiles.open(self.storage_path, "w", encoding="utf-8") as f:
                    await f.write(EMPTY_FILE_CONTENT)
                logger.info("Created empty employee file at %s", self.storage_path)
        except OSError as e:
            raise StorageIOError(
                message="Could not create employee storage file",
                path=str(self.storage_path),
                context={"os_error": str(e)},
            )

    async def _read_employees(self) -> List[Employee]:
        try:
            async with aiofiles.open(self.storage_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise StorageIOError(
                message="Could not read employee storage file",
                path=str(self.storage_path),
                context={"os_error": str(e)},
            )
        except UnicodeDecodeError as e:
            raise StorageIOError(
                message="Employee storage file is not valid UTF-8",
                path=str(self.storage_path),
                context={"decode_error": str(e)},
            )

        try:
            return _EMPLOYEE_LIST.validate_json(content)
        except PydanticValidationError as e:
            raise StorageIOError(
                message="Employee storage file is not a valid employee array",
                path=str(self.storage_path),
                context={"error_count": e.error_count(), "first_error": e.errors()[0]["msg"]},
            )

    async def _write_employees(self) -> None:
        """
        Serialize the full list and replace the file.

        Writes to a sibling ".tmp" file first so a failed write never
        truncates the previous version of the document.
        """
        content = _EMPLOYEE_LIST.dump_json(self._employees, by_alias=True, indent=2)
        tmp_path = self.storage_path.with_name(self.storage_path.name + ".tmp")
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(content)
            tmp_path.replace(self.storage_path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageIOError(
                message="Could not write employee storage file",
                path=str(self.storage_path),
                context={"os_error": str(e)},
            )


# ── Store Dependency ──────────────────────────────────────────────────────
def get_employee_store(request: Request) -> EmployeeStore:
    """
    FastAPI dependency returning the store created in the application lifespan.

    Example usage in a route:
        @router.get("/employees")
        async def list_employees(store: EmployeeStore = Depends(get_employee_store)):
            return await store.list_employees()
    """
    return request.app.state.employee_store
