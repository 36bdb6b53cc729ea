"""Contact Route — POST /v1/contact/ stores a contact form message."""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_contact_message_store
from app.api.validation import validated_body
from app.core.repository_protocols import ContactMessageRepository
from app.schemas.envelope import SuccessEnvelope
from app.schemas.records import ContactMessageRead
from app.schemas.submissions import ContactSubmission

router = APIRouter(prefix="/v1/contact", tags=["contact"])


@router.post(
    "/", response_model=SuccessEnvelope[ContactMessageRead],
    status_code=status.HTTP_201_CREATED,
)
@router.post("", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def submit_contact_message(
    body: ContactSubmission = Depends(validated_body(ContactSubmission)),
    store: ContactMessageRepository = Depends(get_contact_message_store),
):
    record = await store.create(body.name, body.email, body.message)
    return SuccessEnvelope(data=record)
