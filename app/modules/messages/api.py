# modules/messages/api.py
"""HTTP routes for messages."""

from fastapi import APIRouter, Query

from api.dependencies.services import MessageServiceDep
from api.responses import format_success
from api.schemas import MAX_PAGE_LIMIT, PHONE_NUMBER_PATTERN, ApiResponse
from infrastructure.persistence import utcnow
from modules.messages.schemas import (
    MessageEventRequest,
    MessageReceiveRequest,
    MessageResponse,
    MessageSendRequest,
)
from modules.messages.service import (
    MessageReceiveParams,
    MessageSendParams,
    MessageStoreEventParams,
)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("/send", response_model=ApiResponse)
def send_message(payload: MessageSendRequest, service: MessageServiceDep):
    """Queue a message to be sent by the owner's phone."""
    message = service.send_message(
        MessageSendParams(
            owner=payload.owner,
            contact=payload.contact,
            content=payload.content,
            request_received_at=utcnow(),
        )
    )
    return format_success(
        "message added to queue", MessageResponse.model_validate(message)
    )


@router.get("/outstanding", response_model=ApiResponse)
def get_outstanding(
    service: MessageServiceDep,
    owner: str = Query(..., pattern=PHONE_NUMBER_PATTERN),
    limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
):
    """Pending messages the owner's phone should send now."""
    messages = service.get_outstanding(owner, limit)
    return format_success(
        f"fetched {len(messages)} outstanding messages",
        [MessageResponse.model_validate(m) for m in messages],
    )


@router.post("/{message_id}/events", response_model=ApiResponse)
def store_event(message_id: str, payload: MessageEventRequest, service: MessageServiceDep):
    """Report a delivery event for a message."""
    message = service.store_event(
        MessageStoreEventParams(
            message_id=message_id,
            event_name=payload.event_name.value,
            timestamp=payload.timestamp,
            reason=payload.reason,
        )
    )
    return format_success(
        "message event stored successfully", MessageResponse.model_validate(message)
    )


@router.post("/receive", response_model=ApiResponse)
def receive_message(payload: MessageReceiveRequest, service: MessageServiceDep):
    """Store a message received by the owner's phone."""
    message = service.receive_message(
        MessageReceiveParams(
            owner=payload.owner,
            contact=payload.contact,
            content=payload.content,
            timestamp=payload.timestamp,
        )
    )
    return format_success(
        "message received successfully", MessageResponse.model_validate(message)
    )


@router.get("", response_model=ApiResponse)
def get_messages(
    service: MessageServiceDep,
    owner: str = Query(..., pattern=PHONE_NUMBER_PATTERN),
    contact: str = Query(..., pattern=PHONE_NUMBER_PATTERN),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=MAX_PAGE_LIMIT),
):
    """Messages between the owner and a contact, newest first."""
    messages = service.get_messages(owner, contact, skip, limit)
    return format_success(
        f"fetched {len(messages)} messages",
        [MessageResponse.model_validate(m) for m in messages],
    )
