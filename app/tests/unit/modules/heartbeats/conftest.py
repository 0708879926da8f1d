"""Fixtures for heartbeats module tests."""

import pytest

from modules.heartbeats.service import HeartbeatService


@pytest.fixture
def heartbeat_repository(container):
    return container.heartbeat_repository()


@pytest.fixture
def heartbeat_service(heartbeat_repository, mock_dispatcher):
    return HeartbeatService(heartbeat_repository, mock_dispatcher)
