"""Boundary Protocols — contracts between the HTTP layer and the stores.

Invariants:
    - Routes depend on these Protocols, never on a concrete store class
    - Every method is async because implementations do IO

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from datetime import datetime
from typing import Protocol

from app.schemas.records import ContactMessageRead, SubscriberRead


class SubscriberRepository(Protocol):
    """Contract for waitlist subscriber persistence."""
    async def create(self, email: str) -> SubscriberRead: ...
    async def get_by_email(self, email: str) -> SubscriberRead | None: ...
    async def get_by_id(self, subscriber_id: int) -> SubscriberRead | None: ...
    async def list_recent(
        self, limit: int = 100, offset: int = 0,
    ) -> list[SubscriberRead]: ...
    async def count(self) -> int: ...
    async def delete_by_email(self, email: str) -> bool: ...
    async def exists(self, email: str) -> bool: ...


class ContactMessageRepository(Protocol):
    """Contract for contact message persistence."""
    async def create(
        self, name: str, email: str, message: str,
    ) -> ContactMessageRead: ...
    async def get_by_id(self, message_id: int) -> ContactMessageRead | None: ...
    async def list_recent(
        self, limit: int = 100, offset: int = 0,
    ) -> list[ContactMessageRead]: ...
    async def list_by_email(
        self, email: str, limit: int = 50,
    ) -> list[ContactMessageRead]: ...
    async def list_by_date_range(
        self, start: datetime, end: datetime,
    ) -> list[ContactMessageRead]: ...
    async def count(self) -> int: ...
    async def delete(self, message_id: int) -> bool: ...
