"""Unit tests for the composition root."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import inspect

from infrastructure.configuration import DatabaseSettings, EventSettings
from infrastructure.events import ConfigurationError, DuplicateListenerError
from infrastructure.persistence.event_listener_logs import (
    SQLAlchemyEventListenerLogRepository,
)
from modules.heartbeats.listeners import HeartbeatListener
from modules.messages.listeners import MessageListener
from modules.messages.service import MessageService
from server.container import build_container

pytestmark = pytest.mark.unit

EXPECTED_SUBSCRIPTIONS = {
    "message.phone.sending": [
        "message.on-message-phone-sending",
        "heartbeat.on-phone-activity",
    ],
    "message.phone.sent": [
        "message.on-message-phone-sent",
        "message-thread.on-message-phone-status",
        "heartbeat.on-phone-activity",
    ],
    "message.phone.delivered": [
        "message.on-message-phone-delivered",
        "message-thread.on-message-phone-status",
        "heartbeat.on-phone-activity",
    ],
    "message.phone.failed": [
        "message.on-message-phone-failed",
        "message-thread.on-message-phone-status",
    ],
    "message.api.sent": ["message-thread.on-message-api-sent"],
    "message.phone.received": [
        "message-thread.on-message-phone-received",
        "heartbeat.on-phone-activity",
    ],
    "heartbeat.received": ["update-heartbeat-timestamp"],
}


class TestBuildContainer:
    def test_runs_migrations(self, container):
        tables = set(inspect(container.engine).get_table_names())

        assert {
            "events",
            "event_listener_logs",
            "messages",
            "message_threads",
            "heartbeats",
            "heartbeat_monitors",
        } <= tables

    def test_skips_migrations_when_disabled(self, make_settings):
        container = build_container(
            make_settings(
                database=DatabaseSettings(DATABASE_URL="sqlite://", DATABASE_AUTO_MIGRATE=False)
            )
        )

        assert inspect(container.engine).get_table_names() == []
        container.engine.dispose()

    def test_event_store_can_be_disabled(self, make_settings):
        container = build_container(make_settings(events=EventSettings(EVENTS_PERSIST=False)))

        assert container.dispatcher._event_repository is None  # pylint: disable=protected-access
        container.engine.dispose()

    def test_singletons_are_shared(self, container):
        service = container.message_service()

        assert isinstance(
            container.event_listener_log_repository, SQLAlchemyEventListenerLogRepository
        )
        assert service._dispatcher is container.dispatcher  # pylint: disable=protected-access

    def test_services_are_fresh_per_call(self, container):
        first = container.message_service()
        second = container.message_service()

        assert isinstance(first, MessageService)
        assert first is not second

    def test_publish_timeout_is_passed_to_services(self, make_settings):
        container = build_container(
            make_settings(events=EventSettings(EVENTS_PUBLISH_TIMEOUT_SECONDS=1.5))
        )

        service = container.heartbeat_service()

        assert service._publish_timeout == 1.5  # pylint: disable=protected-access
        container.engine.dispose()


class TestRegisterListeners:
    def test_registers_every_route_in_order(self, container):
        container.register_listeners()

        table = {
            event_type: [s.listener_name for s in container.dispatcher.subscriptions(event_type)]
            for event_type in container.dispatcher.event_types()
        }
        assert table == EXPECTED_SUBSCRIPTIONS

    def test_listener_groups_order(self, container):
        groups = container.listener_groups()

        assert isinstance(groups[0], MessageListener)
        assert isinstance(groups[-1], HeartbeatListener)

    def test_registering_twice_is_a_configuration_error(self, container):
        container.register_listeners()

        with pytest.raises(DuplicateListenerError):
            container.register_listeners()

    def test_registering_after_seal_is_a_configuration_error(self, container):
        container.dispatcher.seal()

        with pytest.raises(ConfigurationError):
            container.register_listeners()

    def test_duplicate_route_in_a_group_is_rejected(self, container, monkeypatch):
        group = MagicMock()
        subscription = MagicMock(
            event_type="heartbeat.received", listener_name="dup", handler=MagicMock()
        )
        group.subscriptions.return_value = [subscription, subscription]
        monkeypatch.setattr(container, "listener_groups", lambda: [group])

        with pytest.raises(DuplicateListenerError) as exc_info:
            container.register_listeners()

        assert exc_info.value.event_type == "heartbeat.received"
        assert container.dispatcher.subscriptions("heartbeat.received")[0].listener_name == "dup"
