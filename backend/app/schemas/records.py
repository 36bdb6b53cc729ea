"""Record Schemas — typed rows returned by the stores.

Invariants:
    - Field set matches the RETURNING / SELECT column lists in repositories/
    - created_at is parsed from whatever the driver returns (datetime or ISO text)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SubscriberRead(BaseModel):
    """Waitlist subscriber as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: datetime


class ContactMessageRead(BaseModel):
    """Contact message as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    message: str
    created_at: datetime


class DatabaseStats(BaseModel):
    """Row counts and on-disk size (size only where the server reports one)."""
    subscribers: int
    messages: int
    database_size: str | None = None
