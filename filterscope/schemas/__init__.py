"""Pydantic Schemas — response contracts for the resource API.

Invariants:
    - Schemas describe configuration and results; they never drive filtering
"""
