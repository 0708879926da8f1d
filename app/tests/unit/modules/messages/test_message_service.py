"""Unit tests for the message service."""

from datetime import datetime, timedelta, timezone

import pytest

from modules.messages.errors import MessageNotFoundError
from modules.messages.events import MessagePhoneEventPayload
from modules.messages.models import MessageStatus, MessageType
from modules.messages.service import (
    MessageReceiveParams,
    MessageSendParams,
    MessageStoreEventParams,
)

pytestmark = pytest.mark.unit

NOW = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def _phone_payload(message, timestamp=NOW, reason=None):
    return MessagePhoneEventPayload(
        message_id=message.id,
        owner=message.owner,
        contact=message.contact,
        content=message.content,
        timestamp=timestamp,
        failure_reason=reason,
    )


class TestSendMessage:
    def test_stores_pending_outgoing_message(self, queued_message, message_repository):
        stored = message_repository.load(queued_message.id)

        assert stored.status == MessageStatus.PENDING.value
        assert stored.type == MessageType.MOBILE_TERMINATED.value
        assert stored.content == "hello"
        assert stored.send_attempt_count == 0
        assert stored.order_timestamp == NOW

    def test_publishes_message_api_sent(self, queued_message, published_events):
        events = published_events()

        assert [e.event_type for e in events] == ["message.api.sent"]
        assert events[0].source == "messages"
        assert events[0].payload["message_id"] == queued_message.id
        assert events[0].payload["owner"] == queued_message.owner


class TestGetOutstanding:
    def test_publishes_sending_for_each_pending_message(
        self, message_service, queued_message, mock_dispatcher, published_events, owner
    ):
        mock_dispatcher.publish.reset_mock()

        messages = message_service.get_outstanding(owner, 10)

        assert [m.id for m in messages] == [queued_message.id]
        events = published_events()
        assert [e.event_type for e in events] == ["message.phone.sending"]
        assert events[0].payload["message_id"] == queued_message.id

    def test_oldest_messages_first_and_limited(self, message_service, owner, contact):
        for minutes in (5, 1, 3):
            message_service.send_message(
                MessageSendParams(
                    owner=owner,
                    contact=contact,
                    content=f"sent at {minutes}",
                    request_received_at=NOW + timedelta(minutes=minutes),
                )
            )

        messages = message_service.get_outstanding(owner, 2)

        assert [m.content for m in messages] == ["sent at 1", "sent at 3"]

    def test_other_owners_are_excluded(self, message_service, queued_message):
        assert message_service.get_outstanding("+18005550111", 10) == []


class TestStoreEvent:
    def test_unknown_message_raises_not_found(self, message_service):
        with pytest.raises(MessageNotFoundError):
            message_service.store_event(
                MessageStoreEventParams(message_id="missing", event_name="sent", timestamp=NOW)
            )

    def test_unknown_event_name_raises_value_error(self, message_service, queued_message):
        with pytest.raises(ValueError):
            message_service.store_event(
                MessageStoreEventParams(
                    message_id=queued_message.id, event_name="exploded", timestamp=NOW
                )
            )

    @pytest.mark.parametrize(
        "event_name,event_type",
        [
            ("sent", "message.phone.sent"),
            ("delivered", "message.phone.delivered"),
            ("failed", "message.phone.failed"),
        ],
    )
    def test_publishes_phone_event(
        self,
        message_service,
        queued_message,
        mock_dispatcher,
        published_events,
        event_name,
        event_type,
    ):
        mock_dispatcher.publish.reset_mock()

        message_service.store_event(
            MessageStoreEventParams(
                message_id=queued_message.id,
                event_name=event_name,
                timestamp=NOW,
                reason="no signal" if event_name == "failed" else None,
            )
        )

        event = published_events()[0]
        assert event.event_type == event_type
        assert event.payload["message_id"] == queued_message.id
        if event_name == "failed":
            assert event.payload["failure_reason"] == "no signal"


class TestReceiveMessage:
    def test_stores_received_message_and_publishes(
        self, message_service, message_repository, published_events, owner, contact
    ):
        message = message_service.receive_message(
            MessageReceiveParams(owner=owner, contact=contact, content="hi", timestamp=NOW)
        )

        stored = message_repository.load(message.id)
        assert stored.status == MessageStatus.RECEIVED.value
        assert stored.type == MessageType.MOBILE_ORIGINATED.value
        assert stored.received_at == NOW
        assert published_events()[-1].event_type == "message.phone.received"


class TestGetMessages:
    def test_newest_first_with_pagination(self, message_service, owner, contact):
        for minutes in (1, 2, 3):
            message_service.send_message(
                MessageSendParams(
                    owner=owner,
                    contact=contact,
                    content=f"m{minutes}",
                    request_received_at=NOW + timedelta(minutes=minutes),
                )
            )

        first_page = message_service.get_messages(owner, contact, skip=0, limit=2)
        second_page = message_service.get_messages(owner, contact, skip=2, limit=2)

        assert [m.content for m in first_page] == ["m3", "m2"]
        assert [m.content for m in second_page] == ["m1"]


class TestStatusHandlers:
    def test_sending_records_attempt(self, message_service, message_repository, queued_message):
        message_service.handle_message_sending(_phone_payload(queued_message))

        stored = message_repository.load(queued_message.id)
        assert stored.status == MessageStatus.SENDING.value
        assert stored.send_attempt_count == 1
        assert stored.last_attempted_at == NOW

    def test_sent(self, message_service, message_repository, queued_message):
        message_service.handle_message_sent(_phone_payload(queued_message))

        stored = message_repository.load(queued_message.id)
        assert stored.status == MessageStatus.SENT.value
        assert stored.sent_at == NOW

    def test_delivered(self, message_service, message_repository, queued_message):
        message_service.handle_message_delivered(_phone_payload(queued_message))

        stored = message_repository.load(queued_message.id)
        assert stored.status == MessageStatus.DELIVERED.value
        assert stored.delivered_at == NOW

    def test_failed_keeps_reason(self, message_service, message_repository, queued_message):
        message_service.handle_message_failed(_phone_payload(queued_message, reason="no signal"))

        stored = message_repository.load(queued_message.id)
        assert stored.status == MessageStatus.FAILED.value
        assert stored.failure_reason == "no signal"
        assert stored.failed_at == NOW

    def test_delivered_message_is_not_moved_back(
        self, message_service, message_repository, queued_message
    ):
        message_service.handle_message_delivered(_phone_payload(queued_message))

        message_service.handle_message_sent(_phone_payload(queued_message))
        message_service.handle_message_failed(_phone_payload(queued_message, reason="late"))

        stored = message_repository.load(queued_message.id)
        assert stored.status == MessageStatus.DELIVERED.value
        assert stored.failure_reason is None

    def test_missing_message_raises_not_found(self, message_service, queued_message):
        payload = _phone_payload(queued_message).model_copy(update={"message_id": "missing"})

        with pytest.raises(MessageNotFoundError):
            message_service.handle_message_sent(payload)
