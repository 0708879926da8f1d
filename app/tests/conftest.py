"""Shared fixtures for the test suite.

Persistence-backed fixtures use a private in-memory SQLite database per
test, created through the same composition root as the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from unittest.mock import MagicMock

import pytest

from infrastructure.configuration import (
    DatabaseSettings,
    EventSettings,
    ServerSettings,
    Settings,
    TelemetrySettings,
)
from infrastructure.events import (
    Event,
    EventDispatcher,
    EventListenerLogNotFoundError,
    EventListenerLogRepository,
    PublishResult,
)
from server.container import Container, build_container

OWNER = "+18005550199"
CONTACT = "+18005550100"


@pytest.fixture
def make_settings():
    """Factory for Settings backed by an in-memory database."""

    def _factory(**overrides: Any) -> Settings:
        kwargs: Dict[str, Any] = {
            "ENV": "test",
            "GIT_SHA": "test-sha",
            "database": DatabaseSettings(DATABASE_URL="sqlite://"),
            "server": ServerSettings(),
            "events": EventSettings(),
            "telemetry": TelemetrySettings(),
        }
        kwargs.update(overrides)
        return Settings(**kwargs)

    return _factory


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def container(settings):
    """Container with migrated tables and no listeners registered."""
    container = build_container(settings)
    yield container
    container.engine.dispose()


@pytest.fixture
def wired_container(container: Container) -> Container:
    """Container with every listener group subscribed and the dispatcher sealed."""
    container.register_listeners()
    container.dispatcher.seal()
    return container


@pytest.fixture
def session_factory(container):
    return container.session_factory


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _factory(
        event_type: str = "test.event",
        payload: Optional[Dict[str, Any]] = None,
        event_id: Optional[str] = None,
        source: str = "tests",
        occurred_at: Optional[datetime] = None,
    ) -> Event:
        kwargs: Dict[str, Any] = {
            "event_type": event_type,
            "payload": payload or {},
            "source": source,
            "occurred_at": occurred_at or datetime.now(timezone.utc),
        }
        if event_id is not None:
            kwargs["id"] = event_id
        return Event(**kwargs)

    return _factory


@pytest.fixture
def owner() -> str:
    return OWNER


@pytest.fixture
def contact() -> str:
    return CONTACT


@pytest.fixture
def mock_dispatcher():
    """Dispatcher mock that records published events and reports success."""
    dispatcher = MagicMock(spec=EventDispatcher)
    dispatcher.publish.side_effect = lambda event, deadline=None: PublishResult(
        event_id=event.id, event_type=event.event_type
    )
    return dispatcher


@pytest.fixture
def published_events(mock_dispatcher):
    """Events passed to mock_dispatcher so far, in order."""
    return lambda: [c.args[0] for c in mock_dispatcher.publish.call_args_list]


class InMemoryEventListenerLogRepository(EventListenerLogRepository):
    """Dict-backed EventListenerLogRepository that records every save."""

    def __init__(self):
        self.logs = {}
        self.saved = []

    def save(self, log):
        self.logs[(log.event_id, log.listener_name)] = log
        self.saved.append(log)

    def find_by_event_and_listener(self, event_id, listener_name):
        try:
            return self.logs[(event_id, listener_name)]
        except KeyError:
            raise EventListenerLogNotFoundError(event_id, listener_name) from None

    def find_by_event(self, event_id):
        return [log for (eid, _), log in self.logs.items() if eid == event_id]


@pytest.fixture
def in_memory_log_repository():
    return InMemoryEventListenerLogRepository()
