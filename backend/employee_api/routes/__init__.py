# Routes package init
"""
Employee API — API Routes Package
==================================

Route Inventory:
    - employees.py:  GET  /employees           (list, optional name/salary filters)
                     GET  /employees/{id}      (single employee, 404 if unknown)
                     POST /employees           (create, returns {"id": n})
    - health.py:     GET  /health              (storage status)

Routes stay thin: extract request data, call the EmployeeStore, return the result.
"""
