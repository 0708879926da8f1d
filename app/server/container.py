"""
Composition root.

Builds the process-wide singletons once, in a fixed order, and creates
repositories, services and listener groups fresh on every call. Every
listener subscription is registered here, before the HTTP server starts.

Usage:
    container = build_container(settings)
    container.register_listeners()
    container.dispatcher.seal()

    service = container.message_service()
"""

from dataclasses import dataclass
from typing import List

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from infrastructure.configuration import Settings
from infrastructure.events import (
    ConfigurationError,
    EventDispatcher,
    EventListenerLogRepository,
    EventRepository,
    ListenerGroup,
)
from infrastructure.logging import get_module_logger
from infrastructure.persistence import (
    create_database_engine,
    create_session_factory,
    run_migrations,
)
from infrastructure.persistence.event_listener_logs import (
    SQLAlchemyEventListenerLogRepository,
)
from infrastructure.persistence.events import SQLAlchemyEventRepository
from modules.heartbeats.listeners import HeartbeatListener
from modules.heartbeats.repository import HeartbeatRepository
from modules.heartbeats.service import HeartbeatService
from modules.message_threads.listeners import MessageThreadListener
from modules.message_threads.repository import MessageThreadRepository
from modules.message_threads.service import MessageThreadService
from modules.messages.listeners import MessageListener
from modules.messages.repository import MessageRepository
from modules.messages.service import MessageService

logger = get_module_logger()


@dataclass
class Container:
    """Holds the singletons shared by every request."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    dispatcher: EventDispatcher
    event_listener_log_repository: EventListenerLogRepository
    event_repository: EventRepository

    @property
    def publish_timeout(self):
        return self.settings.events.EVENTS_PUBLISH_TIMEOUT_SECONDS

    def message_repository(self) -> MessageRepository:
        return MessageRepository(self.session_factory)

    def message_thread_repository(self) -> MessageThreadRepository:
        return MessageThreadRepository(self.session_factory)

    def heartbeat_repository(self) -> HeartbeatRepository:
        return HeartbeatRepository(self.session_factory)

    def message_service(self) -> MessageService:
        return MessageService(
            self.message_repository(), self.dispatcher, self.publish_timeout
        )

    def message_thread_service(self) -> MessageThreadService:
        return MessageThreadService(
            self.message_thread_repository(), self.dispatcher, self.publish_timeout
        )

    def heartbeat_service(self) -> HeartbeatService:
        return HeartbeatService(
            self.heartbeat_repository(), self.dispatcher, self.publish_timeout
        )

    def message_listener(self) -> MessageListener:
        return MessageListener(self.message_service(), self.event_listener_log_repository)

    def message_thread_listener(self) -> MessageThreadListener:
        return MessageThreadListener(
            self.message_thread_service(), self.event_listener_log_repository
        )

    def heartbeat_listener(self) -> HeartbeatListener:
        return HeartbeatListener(self.heartbeat_service(), self.event_listener_log_repository)

    def listener_groups(self) -> List[ListenerGroup]:
        """Listener groups in registration order."""
        return [
            self.message_listener(),
            self.message_thread_listener(),
            self.heartbeat_listener(),
        ]

    def register_listeners(self) -> None:
        """Subscribe every listener group to the dispatcher.

        Raises:
            ConfigurationError: If a listener is registered twice for the
                same event type, or the dispatcher is already sealed.
        """
        for group in self.listener_groups():
            for subscription in group.subscriptions():
                try:
                    self.dispatcher.subscribe(
                        subscription.event_type,
                        subscription.listener_name,
                        subscription.handler,
                    )
                except ConfigurationError as e:
                    logger.critical(
                        "listener_registration_failed",
                        group=type(group).__name__,
                        listener=subscription.listener_name,
                        error=str(e),
                    )
                    raise

        logger.info(
            "listeners_registered",
            event_types=len(self.dispatcher.event_types()),
        )


def build_container(settings: Settings) -> Container:
    """Create the singletons in dependency order.

    Order: engine, session factory, migrations, repositories, dispatcher.
    """
    engine = create_database_engine(settings.database)
    session_factory = create_session_factory(engine)

    # Tables are registered on Base by the repository imports above.
    if settings.database.DATABASE_AUTO_MIGRATE:
        run_migrations(engine)

    event_listener_log_repository = SQLAlchemyEventListenerLogRepository(session_factory)
    event_repository = SQLAlchemyEventRepository(session_factory)

    dispatcher = EventDispatcher(
        event_repository if settings.events.EVENTS_PERSIST else None
    )

    logger.info(
        "container_built",
        database=engine.dialect.name,
        auto_migrate=settings.database.DATABASE_AUTO_MIGRATE,
        persist_events=settings.events.EVENTS_PERSIST,
    )
    return Container(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        dispatcher=dispatcher,
        event_listener_log_repository=event_listener_log_repository,
        event_repository=event_repository,
    )
