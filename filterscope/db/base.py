"""SQLAlchemy Declarative Base — shared base class for filterable ORM models.

Invariants:
    - All models exposed through a Resource inherit from Base
    - Base is the single source of truth for table metadata
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for filterscope ORM models."""
    pass
