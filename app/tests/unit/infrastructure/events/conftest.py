"""Fixtures for infrastructure event system tests."""

import pytest
from unittest.mock import MagicMock

from infrastructure.events import (
    EventListenerLogNotFoundError,
    EventListenerLogRepository,
)


@pytest.fixture
def mock_log_repository():
    """Log repository mock with no stored logs."""
    repository = MagicMock(spec=EventListenerLogRepository)

    def _not_found(event_id, listener_name):
        raise EventListenerLogNotFoundError(event_id, listener_name)

    repository.find_by_event_and_listener.side_effect = _not_found
    return repository


@pytest.fixture
def mock_side_effect():
    return MagicMock(return_value=None)
