"""Subscriber Store — verifies create/find/list/count/delete over the subscribers table.

Tests:
    - create returns generated id, stored email, created_at
    - duplicate email → ApiError(CONFLICT) and no second row
    - list_recent pages newest-first with no duplicates or gaps
"""

import pytest

from app.core.errors import ApiError, ErrorKind
from app.repositories.subscribers import ALREADY_SUBSCRIBED, SubscriberStore


@pytest.fixture
def store(database):
    return SubscriberStore(database)


async def test_create_returns_record(store):
    subscriber = await store.create("user@example.com")
    assert subscriber.id > 0
    assert subscriber.email == "user@example.com"
    assert subscriber.created_at is not None


async def test_duplicate_email_is_conflict(store):
    await store.create("user@example.com")
    with pytest.raises(ApiError) as exc:
        await store.create("user@example.com")
    assert exc.value.kind is ErrorKind.CONFLICT
    assert exc.value.message == ALREADY_SUBSCRIBED
    assert await store.count() == 1


async def test_get_by_email_and_id(store):
    created = await store.create("a@b.com")
    assert (await store.get_by_email("a@b.com")).id == created.id
    assert (await store.get_by_id(created.id)).email == "a@b.com"
    assert await store.get_by_email("missing@b.com") is None
    assert await store.get_by_id(9999) is None


async def test_list_recent_pages_newest_first(store):
    first = await store.create("first@b.com")
    second = await store.create("second@b.com")

    page_one = await store.list_recent(limit=1, offset=0)
    page_two = await store.list_recent(limit=1, offset=1)

    assert [s.id for s in page_one] == [second.id]
    assert [s.id for s in page_two] == [first.id]


async def test_list_recent_default_limit(store):
    for i in range(3):
        await store.create(f"user{i}@b.com")
    assert len(await store.list_recent()) == 3


async def test_count(store):
    assert await store.count() == 0
    await store.create("a@b.com")
    await store.create("c@d.com")
    assert await store.count() == 2


async def test_delete_by_email(store):
    await store.create("a@b.com")
    assert await store.delete_by_email("a@b.com") is True
    assert await store.delete_by_email("a@b.com") is False
    assert await store.exists("a@b.com") is False


async def test_exists(store):
    await store.create("a@b.com")
    assert await store.exists("a@b.com") is True
    assert await store.exists("x@y.com") is False
