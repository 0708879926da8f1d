"""Repository contracts used by the event system."""

from abc import ABC, abstractmethod
from typing import List

from infrastructure.events.models import Event, EventListenerLog


class EventListenerLogRepository(ABC):
    """Abstract base class for listener log storage.

    Implementations must enforce uniqueness of (event_id, listener_name) so
    that concurrent deliveries of the same event never create two records.
    """

    @abstractmethod
    def save(self, log: EventListenerLog) -> None:
        """Insert or update the log for its (event_id, listener_name) pair.

        Raises:
            PersistenceError: If the store fails.
        """

    @abstractmethod
    def find_by_event_and_listener(
        self, event_id: str, listener_name: str
    ) -> EventListenerLog:
        """Get the log for an (event_id, listener_name) pair.

        Raises:
            EventListenerLogNotFoundError: If no log exists yet.
            PersistenceError: If the store fails.
        """

    @abstractmethod
    def find_by_event(self, event_id: str) -> List[EventListenerLog]:
        """Get every listener log recorded for an event."""


class EventRepository(ABC):
    """Abstract base class for the published event store."""

    @abstractmethod
    def save(self, event: Event) -> None:
        """Store a published event. Storing the same id twice is a no-op."""

    @abstractmethod
    def load(self, event_id: str) -> Event:
        """Load a stored event.

        Raises:
            NotFoundError: If the event was never stored.
        """
