"""Database Declarations — SQLAlchemy declarative Base for filterable models.

Invariants:
    - Applications declare their filterable models on Base
    - Async sessions only (AsyncSession)
"""
