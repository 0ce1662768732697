"""Infrastructure Layer — database sessions and logging setup.

Invariants:
    - Infrastructure never imports filter semantics from core/ (errors only)
    - SQLAlchemy exceptions mapped to DatabaseError before leaving this layer
"""
