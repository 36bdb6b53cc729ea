"""Subscriber Store — waitlist persistence.

Invariants:
    - email arrives already validated and lowercased
    - A duplicate email surfaces as ApiError(CONFLICT); the unique index is the arbiter,
      so two concurrent subscribes for one address yield exactly one success
    - Listing is newest-first with id as tie-breaker: stable limit/offset pages
"""

import logging

from sqlalchemy.exc import IntegrityError

from app.core.errors import ApiError, ErrorKind
from app.infrastructure.database import Database, is_unique_violation
from app.schemas.records import SubscriberRead

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
ALREADY_SUBSCRIBED = "Email is already subscribed to the waitlist"

_COLUMNS = "id, email, created_at"


class SubscriberStore:
    """SubscriberRepository backed by the subscribers table."""

    def __init__(self, database: Database):
        self._db = database

    async def create(self, email: str) -> SubscriberRead:
        try:
            rows = await self._db.query(
                f"INSERT INTO subscribers (email) VALUES (:email) "
                f"RETURNING {_COLUMNS}",
                {"email": email},
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ApiError(ErrorKind.CONFLICT, ALREADY_SUBSCRIBED) from e
            raise
        subscriber = SubscriberRead.model_validate(dict(rows[0]))
        logger.info(f"Subscriber {subscriber.id} added to waitlist")
        return subscriber

    async def get_by_email(self, email: str) -> SubscriberRead | None:
        rows = await self._db.query(
            f"SELECT {_COLUMNS} FROM subscribers WHERE email = :email",
            {"email": email},
        )
        return SubscriberRead.model_validate(dict(rows[0])) if rows else None

    async def get_by_id(self, subscriber_id: int) -> SubscriberRead | None:
        rows = await self._db.query(
            f"SELECT {_COLUMNS} FROM subscribers WHERE id = :id",
            {"id": subscriber_id},
        )
        return SubscriberRead.model_validate(dict(rows[0])) if rows else None

    async def list_recent(
        self, limit: int = DEFAULT_LIMIT, offset: int = 0,
    ) -> list[SubscriberRead]:
        rows = await self._db.query(
            f"SELECT {_COLUMNS} FROM subscribers "
            "ORDER BY created_at DESC, id DESC "
            "LIMIT :limit OFFSET :offset",
            {"limit": limit, "offset": offset},
        )
        return [SubscriberRead.model_validate(dict(r)) for r in rows]

    async def count(self) -> int:
        rows = await self._db.query("SELECT COUNT(*) AS count FROM subscribers")
        return int(rows[0]["count"])

    async def delete_by_email(self, email: str) -> bool:
        rows = await self._db.query(
            "DELETE FROM subscribers WHERE email = :email RETURNING id",
            {"email": email},
        )
        return len(rows) > 0

    async def exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None
