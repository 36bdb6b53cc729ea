"""Waitlist Route — POST /v1/waitlist/ subscribes an email address.

Invariants:
    - Body validated by WaitlistSubscribe before the store is called
    - Errors are never handled here; they propagate to the error handlers
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_subscriber_store
from app.api.validation import validated_body
from app.core.repository_protocols import SubscriberRepository
from app.schemas.envelope import SuccessEnvelope
from app.schemas.records import SubscriberRead
from app.schemas.submissions import WaitlistSubscribe

router = APIRouter(prefix="/v1/waitlist", tags=["waitlist"])


@router.post(
    "/", response_model=SuccessEnvelope[SubscriberRead],
    status_code=status.HTTP_201_CREATED,
)
@router.post("", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def subscribe_to_waitlist(
    body: WaitlistSubscribe = Depends(validated_body(WaitlistSubscribe)),
    store: SubscriberRepository = Depends(get_subscriber_store),
):
    """Add the email address to the waitlist."""
    subscriber = await store.create(body.email)
    return SuccessEnvelope(data=subscriber)
