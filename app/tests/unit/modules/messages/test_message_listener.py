"""Unit tests for the message listener group."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from infrastructure.events import Event, EventType
from modules.messages.listeners import MessageListener
from modules.messages.service import MessageService

pytestmark = pytest.mark.unit

PAYLOAD = {
    "message_id": "m-1",
    "owner": "+18005550199",
    "contact": "+18005550100",
    "content": "hello",
    "timestamp": "2024-01-01T12:00:00Z",
}


@pytest.fixture
def mock_service():
    return MagicMock(spec=MessageService)


@pytest.fixture
def listener(mock_service, in_memory_log_repository):
    return MessageListener(mock_service, in_memory_log_repository)


class TestRoutes:
    def test_route_table(self, listener):
        routes = [(r.event_type, r.listener_name) for r in listener.routes()]

        assert routes == [
            (EventType.MESSAGE_PHONE_SENDING, "message.on-message-phone-sending"),
            (EventType.MESSAGE_PHONE_SENT, "message.on-message-phone-sent"),
            (EventType.MESSAGE_PHONE_DELIVERED, "message.on-message-phone-delivered"),
            (EventType.MESSAGE_PHONE_FAILED, "message.on-message-phone-failed"),
        ]


class TestHandlers:
    @pytest.mark.parametrize(
        "event_type,method",
        [
            (EventType.MESSAGE_PHONE_SENDING, "handle_message_sending"),
            (EventType.MESSAGE_PHONE_SENT, "handle_message_sent"),
            (EventType.MESSAGE_PHONE_DELIVERED, "handle_message_delivered"),
            (EventType.MESSAGE_PHONE_FAILED, "handle_message_failed"),
        ],
    )
    def test_subscription_calls_service_with_parsed_payload(
        self, listener, mock_service, event_type, method
    ):
        subscription = next(s for s in listener.subscriptions() if s.event_type == event_type)

        subscription.handler(Event.create(event_type, PAYLOAD))

        payload = getattr(mock_service, method).call_args.args[0]
        assert payload.message_id == "m-1"
        assert payload.timestamp == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    def test_failure_reason_is_passed_through(self, listener, mock_service):
        listener.on_message_phone_failed(
            Event.create(EventType.MESSAGE_PHONE_FAILED, {**PAYLOAD, "failure_reason": "no signal"})
        )

        assert mock_service.handle_message_failed.call_args.args[0].failure_reason == "no signal"

    def test_invalid_payload_raises(self, listener):
        with pytest.raises(ValidationError):
            listener.on_message_phone_sent(Event.create(EventType.MESSAGE_PHONE_SENT, {}))
