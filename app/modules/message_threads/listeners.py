"""Listeners that keep message threads in step with messages."""

from typing import List

from infrastructure.events import (
    Event,
    EventListenerLogRepository,
    EventType,
    ListenerGroup,
    ListenerRoute,
)
from modules.message_threads.service import (
    MessageThreadService,
    MessageThreadStatusParams,
    MessageThreadUpdateParams,
)
from modules.messages.events import MessageAPISentPayload, MessagePhoneEventPayload
from modules.messages.models import MessageStatus

STATUS_BY_EVENT_TYPE = {
    EventType.MESSAGE_PHONE_SENT.value: MessageStatus.SENT.value,
    EventType.MESSAGE_PHONE_DELIVERED.value: MessageStatus.DELIVERED.value,
    EventType.MESSAGE_PHONE_FAILED.value: MessageStatus.FAILED.value,
}


class MessageThreadListener(ListenerGroup):
    """Listener group bound to the MessageThreadService."""

    def __init__(
        self, service: MessageThreadService, log_repository: EventListenerLogRepository
    ):
        super().__init__(log_repository)
        self._service = service

    def routes(self) -> List[ListenerRoute]:
        routes = [
            ListenerRoute(
                EventType.MESSAGE_API_SENT,
                "message-thread.on-message-api-sent",
                self.on_message_api_sent,
            ),
            ListenerRoute(
                EventType.MESSAGE_PHONE_RECEIVED,
                "message-thread.on-message-phone-received",
                self.on_message_phone_received,
            ),
        ]
        for event_type in STATUS_BY_EVENT_TYPE:
            routes.append(
                ListenerRoute(
                    event_type,
                    "message-thread.on-message-phone-status",
                    self.on_message_phone_status,
                )
            )
        return routes

    def on_message_api_sent(self, event: Event) -> None:
        payload = MessageAPISentPayload.model_validate(event.payload_dict())
        self._service.update_thread(
            MessageThreadUpdateParams(
                owner=payload.owner,
                contact=payload.contact,
                message_id=payload.message_id,
                content=payload.content,
                status=MessageStatus.PENDING.value,
                timestamp=payload.request_received_at,
            )
        )

    def on_message_phone_received(self, event: Event) -> None:
        payload = MessagePhoneEventPayload.model_validate(event.payload_dict())
        self._service.update_thread(
            MessageThreadUpdateParams(
                owner=payload.owner,
                contact=payload.contact,
                message_id=payload.message_id,
                content=payload.content,
                status=MessageStatus.RECEIVED.value,
                timestamp=payload.timestamp,
            )
        )

    def on_message_phone_status(self, event: Event) -> None:
        payload = MessagePhoneEventPayload.model_validate(event.payload_dict())
        self._service.update_status(
            MessageThreadStatusParams(
                owner=payload.owner,
                contact=payload.contact,
                message_id=payload.message_id,
                status=STATUS_BY_EVENT_TYPE[event.event_type],
                timestamp=payload.timestamp,
            )
        )
