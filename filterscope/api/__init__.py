"""API Layer — FastAPI routes, query-string parsing, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - FilterScopeError → structured JSON via error_handlers
"""
