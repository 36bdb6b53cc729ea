"""Route Dependencies — hand the injected Database handle and stores to controllers.

Invariants:
    - The Database lives on app.state; it is created by the app factory/lifespan, never at import
"""

from fastapi import Depends, Request

from app.core.repository_protocols import (
    ContactMessageRepository, SubscriberRepository,
)
from app.infrastructure.database import Database
from app.repositories.contact_messages import ContactMessageStore
from app.repositories.subscribers import SubscriberStore


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized")
    return database


def get_subscriber_store(
    database: Database = Depends(get_database),
) -> SubscriberRepository:
    return SubscriberStore(database)


def get_contact_message_store(
    database: Database = Depends(get_database),
) -> ContactMessageRepository:
    return ContactMessageStore(database)
