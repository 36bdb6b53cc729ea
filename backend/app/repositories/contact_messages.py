"""Contact Message Store — contact form persistence.

Invariants:
    - Input arrives already validated (trimmed, bounded, lowercased email)
    - No uniqueness constraint; storage failures propagate unchanged
    - Every listing is newest-first with id as tie-breaker
"""

import logging
from datetime import datetime

from app.infrastructure.database import Database
from app.schemas.records import ContactMessageRead

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
DEFAULT_EMAIL_LIMIT = 50

_COLUMNS = "id, name, email, message, created_at"
_NEWEST_FIRST = "ORDER BY created_at DESC, id DESC"


class ContactMessageStore:
    """ContactMessageRepository backed by the contact_messages table."""

    def __init__(self, database: Database):
        self._db = database

    async def create(
        self, name: str, email: str, message: str,
    ) -> ContactMessageRead:
        rows = await self._db.query(
            "INSERT INTO contact_messages (name, email, message) "
            f"VALUES (:name, :email, :message) RETURNING {_COLUMNS}",
            {"name": name, "email": email, "message": message},
        )
        record = ContactMessageRead.model_validate(dict(rows[0]))
        logger.info(f"Contact message {record.id} stored")
        return record

    async def get_by_id(self, message_id: int) -> ContactMessageRead | None:
        rows = await self._db.query(
            f"SELECT {_COLUMNS} FROM contact_messages WHERE id = :id",
            {"id": message_id},
        )
        return ContactMessageRead.model_validate(dict(rows[0])) if rows else None

    async def list_recent(
        self, limit: int = DEFAULT_LIMIT, offset: int = 0,
    ) -> list[ContactMessageRead]:
        rows = await self._db.query(
            f"SELECT {_COLUMNS} FROM contact_messages {_NEWEST_FIRST} "
            "LIMIT :limit OFFSET :offset",
            {"limit": limit, "offset": offset},
        )
        return _records(rows)

    async def list_by_email(
        self, email: str, limit: int = DEFAULT_EMAIL_LIMIT,
    ) -> list[ContactMessageRead]:
        rows = await self._db.query(
            f"SELECT {_COLUMNS} FROM contact_messages WHERE email = :email "
            f"{_NEWEST_FIRST} LIMIT :limit",
            {"email": email, "limit": limit},
        )
        return _records(rows)

    async def list_by_date_range(
        self, start: datetime, end: datetime,
    ) -> list[ContactMessageRead]:
        rows = await self._db.query(
            f"SELECT {_COLUMNS} FROM contact_messages "
            f"WHERE created_at >= :start AND created_at <= :end {_NEWEST_FIRST}",
            {"start": start, "end": end},
        )
        return _records(rows)

    async def count(self) -> int:
        rows = await self._db.query(
            "SELECT COUNT(*) AS count FROM contact_messages",
        )
        return int(rows[0]["count"])

    async def delete(self, message_id: int) -> bool:
        rows = await self._db.query(
            "DELETE FROM contact_messages WHERE id = :id RETURNING id",
            {"id": message_id},
        )
        return len(rows) > 0


def _records(rows) -> list[ContactMessageRead]:
    return [ContactMessageRead.model_validate(dict(r)) for r in rows]
