"""Unit tests for the message thread service."""

from datetime import datetime, timedelta, timezone

import pytest

from modules.message_threads.errors import MessageThreadNotFoundError
from modules.message_threads.service import (
    MessageThreadStatusParams,
    MessageThreadUpdateParams,
)

pytestmark = pytest.mark.unit

NOW = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def _update(owner, contact, message_id="m-1", timestamp=NOW, status="pending", content="hello"):
    return MessageThreadUpdateParams(
        owner=owner,
        contact=contact,
        message_id=message_id,
        content=content,
        status=status,
        timestamp=timestamp,
    )


class TestUpdateThread:
    def test_creates_thread_for_first_message(
        self, thread_service, thread_repository, published_events, owner, contact
    ):
        thread = thread_service.update_thread(_update(owner, contact))

        stored = thread_repository.load_by_owner_contact(owner, contact)
        assert stored.id == thread.id
        assert stored.last_message_id == "m-1"
        assert stored.status == "pending"
        assert stored.order_timestamp == NOW
        assert [e.event_type for e in published_events()] == ["thread.updated"]

    def test_newer_message_moves_thread_forward(
        self, thread_service, thread_repository, owner, contact
    ):
        thread_service.update_thread(_update(owner, contact))

        thread_service.update_thread(
            _update(
                owner,
                contact,
                message_id="m-2",
                timestamp=NOW + timedelta(minutes=1),
                status="received",
                content="reply",
            )
        )

        stored = thread_repository.load_by_owner_contact(owner, contact)
        assert stored.last_message_id == "m-2"
        assert stored.last_message_content == "reply"
        assert stored.status == "received"

    def test_older_message_leaves_thread_unchanged(
        self, thread_service, thread_repository, published_events, owner, contact
    ):
        thread_service.update_thread(_update(owner, contact))

        thread_service.update_thread(
            _update(owner, contact, message_id="m-0", timestamp=NOW - timedelta(minutes=1))
        )

        assert thread_repository.load_by_owner_contact(owner, contact).last_message_id == "m-1"
        assert len(published_events()) == 1

    def test_naive_timestamps_are_treated_as_utc(
        self, thread_service, thread_repository, owner, contact
    ):
        thread_service.update_thread(_update(owner, contact))

        thread_service.update_thread(
            _update(owner, contact, message_id="m-2", timestamp=datetime(2024, 1, 1, 13))
        )

        assert thread_repository.load_by_owner_contact(owner, contact).last_message_id == "m-2"

    def test_one_thread_per_contact(self, thread_service, owner, contact):
        thread_service.update_thread(_update(owner, contact))
        thread_service.update_thread(_update(owner, "+18005550111", message_id="m-2"))

        assert len(thread_service.get_threads(owner, 0, 10)) == 2


class TestUpdateStatus:
    def test_updates_status_of_latest_message(
        self, thread_service, thread_repository, owner, contact
    ):
        thread_service.update_thread(_update(owner, contact))

        thread = thread_service.update_status(
            MessageThreadStatusParams(
                owner=owner, contact=contact, message_id="m-1", status="sent", timestamp=NOW
            )
        )

        assert thread is not None
        assert thread_repository.load_by_owner_contact(owner, contact).status == "sent"

    def test_ignores_status_of_older_message(
        self, thread_service, thread_repository, owner, contact
    ):
        thread_service.update_thread(_update(owner, contact, message_id="m-2"))

        thread = thread_service.update_status(
            MessageThreadStatusParams(
                owner=owner, contact=contact, message_id="m-1", status="failed", timestamp=NOW
            )
        )

        assert thread is None
        assert thread_repository.load_by_owner_contact(owner, contact).status == "pending"

    def test_missing_thread_is_ignored(self, thread_service, published_events, owner, contact):
        thread = thread_service.update_status(
            MessageThreadStatusParams(
                owner=owner, contact=contact, message_id="m-1", status="sent", timestamp=NOW
            )
        )

        assert thread is None
        assert published_events() == []


class TestGetThreads:
    def test_most_recent_first(self, thread_service, owner):
        thread_service.update_thread(_update(owner, "+18005550111", message_id="old"))
        thread_service.update_thread(
            _update(owner, "+18005550122", message_id="new", timestamp=NOW + timedelta(hours=1))
        )

        threads = thread_service.get_threads(owner, 0, 10)

        assert [t.last_message_id for t in threads] == ["new", "old"]

    def test_repository_raises_not_found(self, thread_repository, owner, contact):
        with pytest.raises(MessageThreadNotFoundError):
            thread_repository.load_by_owner_contact(owner, contact)
