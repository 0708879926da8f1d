"""Fixtures for messages module tests."""

from datetime import datetime, timezone

import pytest

from modules.messages.service import MessageSendParams, MessageService


@pytest.fixture
def message_repository(container):
    return container.message_repository()


@pytest.fixture
def message_service(message_repository, mock_dispatcher):
    return MessageService(message_repository, mock_dispatcher)


@pytest.fixture
def queued_message(message_service, owner, contact):
    """A pending outgoing message."""
    return message_service.send_message(
        MessageSendParams(
            owner=owner,
            contact=contact,
            content="hello",
            request_received_at=datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
        )
    )
