"""Waitlist Endpoint — verifies POST /v1/waitlist/ end to end.

Tests:
    - 201 with lowercased email, then 409 CONFLICT for any case variant
    - Missing or invalid email → 400 VALIDATION_ERROR and no row
    - Form-encoded bodies are accepted; trailing slash optional
    - Two simultaneous subscribes for one address: exactly one CONFLICT
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from app.db.base import Base
from app.infrastructure.database import Database
from app.repositories.subscribers import SubscriberStore


async def test_subscribe_returns_201_with_lowercased_email(client):
    res = await client.post("/v1/waitlist/", json={"email": "USER@Example.com"})
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["data"]["email"] == "user@example.com"
    assert isinstance(body["data"]["id"], int)
    assert body["data"]["created_at"]


async def test_repeat_subscribe_is_conflict(client):
    await client.post("/v1/waitlist/", json={"email": "USER@Example.com"})
    res = await client.post("/v1/waitlist/", json={"email": "USER@Example.com"})
    assert res.status_code == 409
    body = res.json()
    assert body["success"] is False
    assert body["error"] == {
        "code": "CONFLICT",
        "message": "Email is already subscribed to the waitlist",
    }


async def test_case_variants_yield_one_success_one_conflict(client, database):
    first = await client.post("/v1/waitlist/", json={"email": "A@x.com"})
    second = await client.post("/v1/waitlist/", json={"email": "a@x.com"})
    assert sorted([first.status_code, second.status_code]) == [201, 409]
    assert await SubscriberStore(database).count() == 1


@pytest.mark.parametrize("payload,message", [
    ({}, "Email is required"),
    ({"email": "not-an-email"}, "Invalid email format"),
    ({"email": ""}, "Email is required"),
])
async def test_invalid_body_is_validation_error(client, database, payload, message):
    res = await client.post("/v1/waitlist/", json=payload)
    assert res.status_code == 400
    assert res.json()["error"] == {"code": "VALIDATION_ERROR", "message": message}
    assert await SubscriberStore(database).count() == 0


async def test_form_encoded_body(client):
    res = await client.post("/v1/waitlist/", data={"email": "Form@Example.com"})
    assert res.status_code == 201
    assert res.json()["data"]["email"] == "form@example.com"


async def test_path_without_trailing_slash(client):
    res = await client.post("/v1/waitlist", json={"email": "a@b.com"})
    assert res.status_code == 201


@pytest.fixture
async def file_database(tmp_path):
    """File-backed store: concurrent requests get separate connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'waitlist.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield Database(engine)
    await engine.dispose()


async def test_concurrent_subscribes_yield_one_conflict(
    build_app, open_client, file_database,
):
    client = open_client(build_app(db=file_database))
    responses = await asyncio.gather(
        client.post("/v1/waitlist/", json={"email": "Race@x.com"}),
        client.post("/v1/waitlist/", json={"email": "race@X.com"}),
    )
    assert sorted(r.status_code for r in responses) == [201, 409]
    assert await SubscriberStore(file_database).count() == 1
