# Services package init
"""
Employee API — Services Layer
==============================

What:  Business logic between routes (HTTP) and the JSON file (persistence).

Service Inventory:
    - EmployeeStore: in-memory employee records mirrored to a JSON file
    - employee_filter: pure name / salary-range predicate used by list queries
"""
