"""Subscriber ORM — waitlist signups, one row per normalized email.

Invariants:
    - email is unique (idx_subscribers_email) and stored lowercased
    - created_at set by the database at insert, never updated
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Subscriber(Base):
    """Waitlist subscriber."""
    __tablename__ = "subscribers"
    __table_args__ = (
        Index("idx_subscribers_email", "email", unique=True),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(),
    )
