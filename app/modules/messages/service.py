"""Message service.

Stores messages and publishes the message.* events. Status changes reported
by the phone are applied by the message listeners, not by the routes.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from infrastructure.events import EventDispatcher, EventPublishingService, EventType
from infrastructure.logging import get_module_logger
from infrastructure.persistence import utcnow
from infrastructure.telemetry import get_tracer
from modules.messages.events import MessageAPISentPayload, MessagePhoneEventPayload
from modules.messages.models import Message, MessageStatus, MessageType
from modules.messages.repository import MessageRepository

logger = get_module_logger()
tracer = get_tracer(__name__)

PHONE_EVENT_TYPES = {
    "sent": EventType.MESSAGE_PHONE_SENT,
    "delivered": EventType.MESSAGE_PHONE_DELIVERED,
    "failed": EventType.MESSAGE_PHONE_FAILED,
}

# Statuses after which the phone no longer reports on a message.
FINAL_STATUSES = {MessageStatus.DELIVERED.value, MessageStatus.RECEIVED.value}


@dataclass(frozen=True)
class MessageSendParams:
    owner: str
    contact: str
    content: str
    request_received_at: datetime


@dataclass(frozen=True)
class MessageReceiveParams:
    owner: str
    contact: str
    content: str
    timestamp: datetime


@dataclass(frozen=True)
class MessageStoreEventParams:
    message_id: str
    event_name: str
    timestamp: datetime
    reason: Optional[str] = None


class MessageService(EventPublishingService):
    """Business operations on messages."""

    source = "messages"

    def __init__(
        self,
        repository: MessageRepository,
        dispatcher: EventDispatcher,
        publish_timeout: Optional[float] = None,
    ):
        super().__init__(dispatcher, publish_timeout)
        self._repository = repository

    def send_message(self, params: MessageSendParams) -> Message:
        """Queue a new outgoing message and publish message.api.sent."""
        with tracer.start_as_current_span("message_service.send_message"):
            message = self._repository.save(
                Message(
                    id=str(uuid4()),
                    owner=params.owner,
                    contact=params.contact,
                    content=params.content,
                    type=MessageType.MOBILE_TERMINATED.value,
                    status=MessageStatus.PENDING.value,
                    request_received_at=params.request_received_at,
                    order_timestamp=params.request_received_at,
                    send_attempt_count=0,
                )
            )
            logger.info("message_queued", message_id=message.id, owner=message.owner)

            self._publish(
                EventType.MESSAGE_API_SENT,
                MessageAPISentPayload(
                    message_id=message.id,
                    owner=message.owner,
                    contact=message.contact,
                    content=message.content,
                    request_received_at=message.request_received_at,
                ).model_dump(mode="json"),
            )
            return message

    def get_outstanding(self, owner: str, limit: int) -> List[Message]:
        """Hand the pending messages of a phone over for sending.

        A message.phone.sending event is published for every message; the
        returned messages reflect the status set by its listeners.
        """
        with tracer.start_as_current_span("message_service.get_outstanding"):
            messages = self._repository.get_outstanding(owner, limit)
            timestamp = utcnow()
            for message in messages:
                self._publish(
                    EventType.MESSAGE_PHONE_SENDING,
                    self._phone_payload(message, timestamp),
                )

            logger.info("outstanding_messages_fetched", owner=owner, count=len(messages))
            return [self._repository.load(message.id) for message in messages]

    def store_event(self, params: MessageStoreEventParams) -> Message:
        """Publish a delivery event reported by the phone for a message.

        Raises:
            MessageNotFoundError: If the message does not exist.
            ValueError: If the event name is not sent, delivered or failed.
        """
        event_type = PHONE_EVENT_TYPES.get(params.event_name)
        if event_type is None:
            raise ValueError(f"unknown message event [{params.event_name}]")

        with tracer.start_as_current_span("message_service.store_event"):
            message = self._repository.load(params.message_id)
            self._publish(
                event_type,
                self._phone_payload(message, params.timestamp, params.reason),
            )
            return self._repository.load(message.id)

    def receive_message(self, params: MessageReceiveParams) -> Message:
        """Store a message received by the phone and publish message.phone.received."""
        with tracer.start_as_current_span("message_service.receive_message"):
            message = self._repository.save(
                Message(
                    id=str(uuid4()),
                    owner=params.owner,
                    contact=params.contact,
                    content=params.content,
                    type=MessageType.MOBILE_ORIGINATED.value,
                    status=MessageStatus.RECEIVED.value,
                    request_received_at=utcnow(),
                    order_timestamp=params.timestamp,
                    received_at=params.timestamp,
                    send_attempt_count=0,
                )
            )
            logger.info("message_received", message_id=message.id, owner=message.owner)

            self._publish(
                EventType.MESSAGE_PHONE_RECEIVED,
                self._phone_payload(message, params.timestamp),
            )
            return message

    def get_messages(self, owner: str, contact: str, skip: int, limit: int) -> List[Message]:
        """Messages between an owner and a contact, newest first."""
        return self._repository.index(owner, contact, skip, limit)

    def handle_message_sending(self, payload: MessagePhoneEventPayload) -> None:
        """Record a send attempt by the phone."""
        message = self._repository.load(payload.message_id)
        if message.status in FINAL_STATUSES:
            logger.info(
                "message_status_unchanged",
                message_id=message.id,
                status=message.status,
                reported=MessageStatus.SENDING.value,
            )
            return

        message.status = MessageStatus.SENDING.value
        message.last_attempted_at = payload.timestamp
        message.send_attempt_count = (message.send_attempt_count or 0) + 1
        self._repository.update(message)

    def handle_message_sent(self, payload: MessagePhoneEventPayload) -> None:
        message = self._repository.load(payload.message_id)
        if message.status in FINAL_STATUSES:
            logger.info(
                "message_status_unchanged",
                message_id=message.id,
                status=message.status,
                reported=MessageStatus.SENT.value,
            )
            return

        message.status = MessageStatus.SENT.value
        message.sent_at = payload.timestamp
        self._repository.update(message)

    def handle_message_delivered(self, payload: MessagePhoneEventPayload) -> None:
        message = self._repository.load(payload.message_id)
        message.status = MessageStatus.DELIVERED.value
        message.delivered_at = payload.timestamp
        self._repository.update(message)

    def handle_message_failed(self, payload: MessagePhoneEventPayload) -> None:
        message = self._repository.load(payload.message_id)
        if message.status in FINAL_STATUSES:
            logger.info(
                "message_status_unchanged",
                message_id=message.id,
                status=message.status,
                reported=MessageStatus.FAILED.value,
            )
            return

        message.status = MessageStatus.FAILED.value
        message.failed_at = payload.timestamp
        message.failure_reason = payload.failure_reason
        self._repository.update(message)

    @staticmethod
    def _phone_payload(
        message: Message, timestamp: datetime, failure_reason: Optional[str] = None
    ) -> dict:
        return MessagePhoneEventPayload(
            message_id=message.id,
            owner=message.owner,
            contact=message.contact,
            content=message.content,
            timestamp=timestamp,
            failure_reason=failure_reason,
        ).model_dump(mode="json")
