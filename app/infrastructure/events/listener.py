"""Idempotent listener execution.

Every listener registered with the dispatcher is wrapped in an
IdempotentListener. The wrapper consults the EventListenerLog before running
the side effect, so a redelivered event never repeats a side effect that
already succeeded:

    1. find the log for (event.id, listener name)
    2. success -> return without running anything
    3. otherwise record pending and run the side effect
    4. record success, or record failed and raise ListenerExecutionError

Failures are not retried here. Redelivery (re-publishing the event) retries
listeners whose log is pending or failed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Union

from infrastructure.events.errors import (
    EventListenerLogNotFoundError,
    ListenerExecutionError,
)
from infrastructure.events.models import Event, EventListenerLog
from infrastructure.events.repositories import EventListenerLogRepository
from infrastructure.events.types import EventType
from infrastructure.logging import get_module_logger
from infrastructure.persistence.errors import PersistenceError
from infrastructure.telemetry import get_tracer

logger = get_module_logger()
tracer = get_tracer(__name__)

SideEffect = Callable[[Event], None]


class IdempotentListener:
    """Runs a side effect at most once per event, tracked by EventListenerLog."""

    def __init__(
        self,
        listener_name: str,
        side_effect: SideEffect,
        repository: EventListenerLogRepository,
    ):
        self.listener_name = listener_name
        self._side_effect = side_effect
        self._repository = repository

    def __call__(self, event: Event) -> None:
        log = logger.bind(
            event_id=event.id,
            event_type=event.event_type,
            listener=self.listener_name,
        )

        with tracer.start_as_current_span(
            "listener.handle",
            attributes={"event.id": event.id, "listener.name": self.listener_name},
        ):
            existing = self._find(event)
            if existing is not None and existing.is_success:
                log.debug("listener_already_processed")
                return

            record = existing or EventListenerLog.for_event(event, self.listener_name)
            record = record.started()
            self._save(record, event)

            try:
                self._side_effect(event)
            except Exception as e:
                log.error("listener_side_effect_failed", error=str(e), attempts=record.attempts)
                try:
                    self._save(record.failed(str(e)), event)
                except ListenerExecutionError as save_error:
                    raise ListenerExecutionError(
                        self.listener_name,
                        event.id,
                        f"{e}; recording the failure also failed: {save_error.reason}",
                    ) from e
                raise ListenerExecutionError(self.listener_name, event.id, str(e)) from e

            self._save(record.succeeded(), event)
            log.debug("listener_succeeded", attempts=record.attempts)

    def _find(self, event: Event) -> Optional[EventListenerLog]:
        try:
            return self._repository.find_by_event_and_listener(
                event.id, self.listener_name
            )
        except EventListenerLogNotFoundError:
            return None
        except PersistenceError as e:
            logger.error(
                "listener_log_lookup_failed",
                event_id=event.id,
                listener=self.listener_name,
                error=str(e),
            )
            raise ListenerExecutionError(self.listener_name, event.id, str(e)) from e

    def _save(self, record: EventListenerLog, event: Event) -> None:
        try:
            self._repository.save(record)
        except PersistenceError as e:
            logger.error(
                "listener_log_save_failed",
                event_id=event.id,
                listener=self.listener_name,
                status=record.status.value,
                error=str(e),
            )
            raise ListenerExecutionError(self.listener_name, event.id, str(e)) from e

    def __repr__(self) -> str:
        return f"IdempotentListener({self.listener_name!r})"


@dataclass(frozen=True)
class ListenerRoute:
    """One (event type, listener name, side effect) entry of a listener group."""

    event_type: Union[EventType, str]
    listener_name: str
    side_effect: SideEffect


@dataclass(frozen=True)
class ListenerSubscription:
    """A route with its side effect wrapped for idempotent execution."""

    event_type: Union[EventType, str]
    listener_name: str
    handler: IdempotentListener


class ListenerGroup(ABC):
    """Base class for the listener groups bound to a domain service.

    Subclasses declare their routes; subscriptions() wraps every route in an
    IdempotentListener sharing the group's log repository.
    """

    def __init__(self, log_repository: EventListenerLogRepository):
        self._log_repository = log_repository

    @abstractmethod
    def routes(self) -> List[ListenerRoute]:
        """The event types this group listens to and the side effect for each."""

    def subscriptions(self) -> Iterator[ListenerSubscription]:
        for route in self.routes():
            yield ListenerSubscription(
                event_type=route.event_type,
                listener_name=route.listener_name,
                handler=IdempotentListener(
                    route.listener_name, route.side_effect, self._log_repository
                ),
            )
