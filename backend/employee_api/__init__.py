"""
Employee API — Application Package Initializer
===============================================

What: Marks the `employee_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       Services (Store + Filter)     │  ← In-memory records, id assignment
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic models (HTTP + file format)
    ├─────────────────────────────────────┤
    │      JSON file (Persistence)        │  ← data/employees.json, full rewrite
    └─────────────────────────────────────┘

    Routes never touch the JSON file; they go through the EmployeeStore
    injected per request.
"""

__version__ = "1.0.0"
