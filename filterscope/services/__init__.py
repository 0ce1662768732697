"""Services Layer — resource registry and the async filter-and-fetch runner.

Invariants:
    - Services orchestrate core + adapters; no filter semantics live here
    - Resource lookup uses explicit registration (no auto-discovery)
"""
