"""Infrastructure event system - in-process event dispatcher.

Services publish events after committing a change; listener groups
subscribe named, idempotent listeners that perform the side effects.

Usage:

    from infrastructure.events import Event, EventDispatcher, EventType

    dispatcher = EventDispatcher()
    dispatcher.subscribe(EventType.HEARTBEAT_RECEIVED, "update-heartbeat-timestamp", handler)

    result = dispatcher.publish(
        Event.create(EventType.HEARTBEAT_RECEIVED, {"owner": "+18005550199"})
    )
    for failure in result.failures:
        print(failure.listener_name, failure.error)
"""

from infrastructure.events.dispatcher import (
    EventDispatcher,
    EventHandler,
    ListenerFailure,
    PublishResult,
    Subscription,
)
from infrastructure.events.errors import (
    ConfigurationError,
    DuplicateListenerError,
    EventListenerLogNotFoundError,
    ListenerExecutionError,
)
from infrastructure.events.listener import (
    IdempotentListener,
    ListenerGroup,
    ListenerRoute,
    ListenerSubscription,
)
from infrastructure.events.models import Event, EventListenerLog, ListenerStatus
from infrastructure.events.repositories import (
    EventListenerLogRepository,
    EventRepository,
)
from infrastructure.events.service import EventPublishingService
from infrastructure.events.types import EventType

__all__ = [
    "Event",
    "EventType",
    "EventListenerLog",
    "ListenerStatus",
    "EventDispatcher",
    "EventHandler",
    "Subscription",
    "ListenerFailure",
    "PublishResult",
    "ConfigurationError",
    "DuplicateListenerError",
    "EventListenerLogNotFoundError",
    "ListenerExecutionError",
    "IdempotentListener",
    "ListenerGroup",
    "ListenerRoute",
    "ListenerSubscription",
    "EventListenerLogRepository",
    "EventRepository",
    "EventPublishingService",
]
