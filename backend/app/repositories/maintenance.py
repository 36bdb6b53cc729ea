"""Maintenance Store — administrative operations over both tables.

Invariants:
    - Never reachable over HTTP; called from operator tooling and tests only
    - clear() removes contact messages before subscribers, in one transaction each
    - Table names bound as parameters wherever the SQL accepts a value
    - database_size is reported only by PostgreSQL; other dialects return None
"""

import logging

from app.infrastructure.database import Database
from app.schemas.records import DatabaseStats

logger = logging.getLogger(__name__)

TABLES = ("contact_messages", "subscribers")


class MaintenanceStore:
    """Stats and destructive resets for the landing-page schema."""

    def __init__(self, database: Database):
        self._db = database

    async def stats(self) -> DatabaseStats:
        rows = await self._db.query(
            "SELECT "
            "(SELECT COUNT(*) FROM subscribers) AS subscribers, "
            "(SELECT COUNT(*) FROM contact_messages) AS messages",
        )
        size = None
        if self._db.dialect_name == "postgresql":
            size_rows = await self._db.query(
                "SELECT pg_size_pretty(pg_database_size(current_database())) AS size",
            )
            size = size_rows[0]["size"]
        return DatabaseStats(
            subscribers=int(rows[0]["subscribers"]),
            messages=int(rows[0]["messages"]),
            database_size=size,
        )

    async def clear(self) -> None:
        """Delete every row (destructive)."""
        await self._db.query("DELETE FROM contact_messages")
        await self._db.query("DELETE FROM subscribers")
        logger.warning("All subscribers and contact messages deleted")

    async def reset_sequences(self) -> None:
        """Restart id generation at 1.

        SQLite tables without AUTOINCREMENT reuse max(rowid) + 1, so only
        PostgreSQL sequences need restarting.
        """
        if self._db.dialect_name != "postgresql":
            return
        for table in TABLES:
            await self._db.query(
                "SELECT setval(pg_get_serial_sequence(:table, 'id'), 1, false)",
                {"table": table},
            )
        logger.warning("Id sequences restarted")
