"""Adapters — backend implementations of the FilterAdapter protocol.

Invariants:
    - Each adapter owns its query representation (the scope)
    - Operations registered explicitly in a DispatchTable at construction
"""
