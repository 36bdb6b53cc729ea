"""Contact Message Store — verifies create/find/list/count/delete over contact_messages.

Tests:
    - create returns the full record; one sender may write many messages
    - listings are newest-first; list_by_email filters and bounds
"""

from datetime import datetime

import pytest

from app.repositories.contact_messages import ContactMessageStore


@pytest.fixture
def store(database):
    return ContactMessageStore(database)


async def test_create_returns_full_record(store):
    record = await store.create("Ada", "ada@example.com", "Hello")
    assert record.id > 0
    assert (record.name, record.email, record.message) == (
        "Ada", "ada@example.com", "Hello",
    )
    assert record.created_at is not None


async def test_same_sender_may_write_twice(store):
    await store.create("Ada", "ada@example.com", "One")
    await store.create("Ada", "ada@example.com", "Two")
    assert await store.count() == 2


async def test_get_by_id(store):
    record = await store.create("Ada", "ada@example.com", "Hello")
    assert (await store.get_by_id(record.id)).message == "Hello"
    assert await store.get_by_id(9999) is None


async def test_list_recent_pages_newest_first(store):
    first = await store.create("Ada", "ada@example.com", "One")
    second = await store.create("Bob", "bob@example.com", "Two")

    page_one = await store.list_recent(limit=1, offset=0)
    page_two = await store.list_recent(limit=1, offset=1)

    assert [m.id for m in page_one] == [second.id]
    assert [m.id for m in page_two] == [first.id]


async def test_list_by_email(store):
    await store.create("Ada", "ada@example.com", "One")
    await store.create("Bob", "bob@example.com", "Two")
    latest = await store.create("Ada", "ada@example.com", "Three")

    messages = await store.list_by_email("ada@example.com")
    assert [m.message for m in messages] == ["Three", "One"]
    assert [m.id for m in await store.list_by_email("ada@example.com", limit=1)] == [
        latest.id,
    ]


async def test_list_by_date_range(store):
    await store.create("Ada", "ada@example.com", "One")
    inside = await store.list_by_date_range(
        datetime(2000, 1, 1), datetime(2999, 12, 31),
    )
    outside = await store.list_by_date_range(
        datetime(1990, 1, 1), datetime(1991, 1, 1),
    )
    assert len(inside) == 1
    assert outside == []


async def test_delete(store):
    record = await store.create("Ada", "ada@example.com", "Hello")
    assert await store.delete(record.id) is True
    assert await store.delete(record.id) is False
    assert await store.count() == 0
