"""SQLAlchemy Declarative Base — shared base class for both ORM models.

Invariants:
    - All models inherit from Base
    - Constraint names are deterministic, so migrations never depend on
      server-generated names
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "idx_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
    """Base class for all landing-page ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
