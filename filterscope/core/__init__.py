"""Core Layer — pure filter-resolution logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, adapters/, infrastructure/ or db/
    - Scopes are threaded through, never inspected
    - Backends and type systems reached only through boundary_protocols

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
