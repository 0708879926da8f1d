"""Event dispatcher for the in-process event system.

The dispatcher owns the subscription table: event type -> ordered list of
named listeners. Subscriptions are registered by the composition root at
startup; publishing delivers an event synchronously, in registration order,
to every listener of its type.
"""

import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Union

from infrastructure.events.errors import ConfigurationError, DuplicateListenerError
from infrastructure.events.models import Event
from infrastructure.events.repositories import EventRepository
from infrastructure.events.types import EventType, event_type_name
from infrastructure.logging import get_module_logger
from infrastructure.telemetry import get_tracer

logger = get_module_logger()
tracer = get_tracer(__name__)

# Deadline of the publish currently delivering, seen by nested publishes
_active_deadline: ContextVar[Optional[float]] = ContextVar(
    "event_publish_deadline", default=None
)


def _earliest(*deadlines: Optional[float]) -> Optional[float]:
    set_deadlines = [d for d in deadlines if d is not None]
    return min(set_deadlines) if set_deadlines else None


class EventHandler(Protocol):
    """A callable that reacts to one event. Failure is signalled by raising."""

    def __call__(self, event: Event) -> None: ...


@dataclass(frozen=True)
class Subscription:
    """A named listener registered for an event type."""

    listener_name: str
    handler: EventHandler


@dataclass(frozen=True)
class ListenerFailure:
    """A listener that raised while handling an event."""

    listener_name: str
    error: str


@dataclass
class PublishResult:
    """Aggregate outcome of delivering one event to its listeners.

    Attributes:
        event_id: id of the published event
        event_type: topic of the published event
        executed: names of listeners that completed, in order
        failures: listeners that raised, in order
        skipped: listeners not started because the deadline had passed
        store_error: error from the event store, if storing the event failed
    """

    event_id: str
    event_type: str
    executed: List[str] = field(default_factory=list)
    failures: List[ListenerFailure] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    store_error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """True when every listener ran and succeeded and the event was stored."""
        return not self.failures and not self.skipped and self.store_error is None


class EventDispatcher:
    """In-process publish/subscribe dispatcher.

    Usage:
        dispatcher = EventDispatcher(event_repository)
        dispatcher.subscribe(EventType.HEARTBEAT_RECEIVED, "update-heartbeat-timestamp", handler)
        dispatcher.seal()

        result = dispatcher.publish(Event.create(EventType.HEARTBEAT_RECEIVED, {"owner": "+18005550199"}))
        if not result.is_success:
            ...
    """

    def __init__(self, event_repository: Optional[EventRepository] = None):
        """Initialize the dispatcher.

        Args:
            event_repository: Optional store every published event is saved
                to before delivery.
        """
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._event_repository = event_repository
        self._sealed = False

    def subscribe(
        self,
        event_type: Union[EventType, str],
        listener_name: str,
        handler: EventHandler,
    ) -> None:
        """Register a listener for an event type.

        Args:
            event_type: Topic to listen to.
            listener_name: Name unique among the listeners of this topic.
            handler: Callable invoked with each published event.

        Raises:
            DuplicateListenerError: If listener_name is already subscribed
                to event_type.
            ConfigurationError: If the dispatcher has been sealed.
        """
        topic = event_type_name(event_type)
        if self._sealed:
            raise ConfigurationError(
                f"cannot subscribe [{listener_name}] to [{topic}] after the dispatcher is sealed"
            )

        subscriptions = self._subscriptions.setdefault(topic, [])
        if any(s.listener_name == listener_name for s in subscriptions):
            raise DuplicateListenerError(topic, listener_name)

        subscriptions.append(Subscription(listener_name=listener_name, handler=handler))
        logger.debug(
            "listener_subscribed",
            event_type=topic,
            listener=listener_name,
            total_listeners=len(subscriptions),
        )

    def seal(self) -> None:
        """Make the subscription table read-only."""
        self._sealed = True
        logger.debug(
            "dispatcher_sealed",
            event_types=len(self._subscriptions),
            listeners=sum(len(s) for s in self._subscriptions.values()),
        )

    @property
    def sealed(self) -> bool:
        return self._sealed

    def publish(self, event: Event, deadline: Optional[float] = None) -> PublishResult:
        """Deliver an event to every listener subscribed to its type.

        Listeners run sequentially in registration order. A listener that
        raises is logged and recorded in the result; the remaining listeners
        still run. This method does not raise for listener failures.

        A publish made from inside a listener is bound by the enclosing
        publish's deadline as well as its own.

        Args:
            event: The event to publish.
            deadline: Optional time.monotonic() value. Listeners that would
                start after it are skipped.

        Returns:
            PublishResult describing every listener's outcome.
        """
        deadline = _earliest(deadline, _active_deadline.get())
        result = PublishResult(event_id=event.id, event_type=event.event_type)
        subscriptions = list(self._subscriptions.get(event.event_type, ()))

        with tracer.start_as_current_span(
            "event_dispatcher.publish",
            attributes={
                "event.id": event.id,
                "event.type": event.event_type,
                "event.listeners": len(subscriptions),
            },
        ):
            self._store(event, result)

            logger.info(
                "event_published",
                event_id=event.id,
                event_type=event.event_type,
                source=event.source,
                listener_count=len(subscriptions),
            )

            token = _active_deadline.set(deadline)
            try:
                for index, subscription in enumerate(subscriptions):
                    if deadline is not None and time.monotonic() >= deadline:
                        result.skipped = [s.listener_name for s in subscriptions[index:]]
                        logger.warning(
                            "event_publish_deadline_exceeded",
                            event_id=event.id,
                            event_type=event.event_type,
                            skipped=result.skipped,
                        )
                        break
                    self._deliver(event, subscription, result)
            finally:
                _active_deadline.reset(token)

        return result

    def _store(self, event: Event, result: PublishResult) -> None:
        if self._event_repository is None:
            return
        try:
            self._event_repository.save(event)
        except Exception as e:
            result.store_error = str(e)
            logger.error(
                "event_store_failed",
                event_id=event.id,
                event_type=event.event_type,
                error=str(e),
                exc_info=True,
            )

    def _deliver(
        self, event: Event, subscription: Subscription, result: PublishResult
    ) -> None:
        try:
            subscription.handler(event)
        except Exception as e:
            result.failures.append(
                ListenerFailure(listener_name=subscription.listener_name, error=str(e))
            )
            logger.error(
                "listener_failed",
                event_id=event.id,
                event_type=event.event_type,
                listener=subscription.listener_name,
                error=str(e),
            )
            return

        result.executed.append(subscription.listener_name)

    def subscriptions(self, event_type: Union[EventType, str]) -> List[Subscription]:
        """Get the listeners subscribed to an event type, in order."""
        return list(self._subscriptions.get(event_type_name(event_type), ()))

    def event_types(self) -> List[str]:
        """Get every event type with at least one subscription."""
        return list(self._subscriptions.keys())
