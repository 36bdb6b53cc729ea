"""ORM Models — SQLAlchemy declarative models for the two persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Column sizes mirror the request schemas (email 255, name 100)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for alembic and tests
"""

from app.models.subscriber import Subscriber  # noqa: F401
from app.models.contact_message import ContactMessage  # noqa: F401
