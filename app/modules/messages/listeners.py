"""Listeners that apply phone status events to messages."""

from typing import List

from infrastructure.events import (
    Event,
    EventListenerLogRepository,
    EventType,
    ListenerGroup,
    ListenerRoute,
)
from modules.messages.events import MessagePhoneEventPayload
from modules.messages.service import MessageService


class MessageListener(ListenerGroup):
    """Listener group bound to the MessageService."""

    def __init__(self, service: MessageService, log_repository: EventListenerLogRepository):
        super().__init__(log_repository)
        self._service = service

    def routes(self) -> List[ListenerRoute]:
        return [
            ListenerRoute(
                EventType.MESSAGE_PHONE_SENDING,
                "message.on-message-phone-sending",
                self.on_message_phone_sending,
            ),
            ListenerRoute(
                EventType.MESSAGE_PHONE_SENT,
                "message.on-message-phone-sent",
                self.on_message_phone_sent,
            ),
            ListenerRoute(
                EventType.MESSAGE_PHONE_DELIVERED,
                "message.on-message-phone-delivered",
                self.on_message_phone_delivered,
            ),
            ListenerRoute(
                EventType.MESSAGE_PHONE_FAILED,
                "message.on-message-phone-failed",
                self.on_message_phone_failed,
            ),
        ]

    def on_message_phone_sending(self, event: Event) -> None:
        self._service.handle_message_sending(_payload(event))

    def on_message_phone_sent(self, event: Event) -> None:
        self._service.handle_message_sent(_payload(event))

    def on_message_phone_delivered(self, event: Event) -> None:
        self._service.handle_message_delivered(_payload(event))

    def on_message_phone_failed(self, event: Event) -> None:
        self._service.handle_message_failed(_payload(event))


def _payload(event: Event) -> MessagePhoneEventPayload:
    return MessagePhoneEventPayload.model_validate(event.payload_dict())
