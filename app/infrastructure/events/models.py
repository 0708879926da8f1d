"""Event models for the event dispatch system.

Provides the immutable Event record passed from publishing services to
listeners, and the EventListenerLog record that tracks whether a listener
already processed an event.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union
from uuid import uuid4

from infrastructure.events.types import EventType, event_type_name
from infrastructure.persistence.types import as_utc, utcnow


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class Event:
    """Immutable record of a completed domain action.

    Events are created by a service right after its state change is
    committed and are shared read-only with every listener.
    """

    event_type: str
    """The topic of the event (e.g., 'message.phone.sent')."""

    payload: Mapping[str, Any] = field(default_factory=dict)
    """JSON-compatible domain data, frozen at every level. Opaque to the dispatcher."""

    source: str = ""
    """Component that published the event."""

    id: str = field(default_factory=lambda: str(uuid4()))
    """Globally unique identifier, used as the idempotency key."""

    occurred_at: datetime = field(default_factory=utcnow)
    """When the event occurred."""

    def __post_init__(self):
        object.__setattr__(self, "event_type", event_type_name(self.event_type))
        object.__setattr__(self, "payload", _freeze(self.payload))
        object.__setattr__(self, "occurred_at", as_utc(self.occurred_at))

    def payload_dict(self) -> Dict[str, Any]:
        """Mutable deep copy of the payload, for validation or storage."""
        return _thaw(self.payload)

    @classmethod
    def create(
        cls,
        event_type: Union[EventType, str],
        payload: Optional[Mapping[str, Any]] = None,
        source: str = "",
    ) -> "Event":
        """Create a new event with a fresh id and the current time."""
        return cls(event_type=event_type, payload=payload or {}, source=source)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary.

        Returns:
            Dictionary representation of the event with ISO format timestamp.
        """
        return {
            "id": self.id,
            "event_type": self.event_type,
            "source": self.source,
            "payload": self.payload_dict(),
            "occurred_at": self.occurred_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Deserialize event from dictionary.

        Args:
            data: Dictionary with event fields.

        Returns:
            Event instance.

        Raises:
            ValueError: If required fields are missing or invalid.
        """
        try:
            occurred_at = data.get("occurred_at")
            if isinstance(occurred_at, str):
                occurred_at = datetime.fromisoformat(occurred_at)
            elif occurred_at is None:
                occurred_at = utcnow()

            return cls(
                id=data["id"],
                event_type=data["event_type"],
                source=data.get("source", ""),
                payload=data.get("payload") or {},
                occurred_at=occurred_at,
            )
        except (KeyError, ValueError, TypeError) as e:
            raise ValueError(f"Invalid event data: {e}")

    def __hash__(self) -> int:
        return hash(self.id)


class ListenerStatus(str, Enum):
    """Execution status of a listener for one event."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class EventListenerLog:
    """Durable record of one listener's execution for one event.

    (event_id, listener_name) identifies the record; at most one record, and
    therefore at most one success, exists per pair.
    """

    event_id: str
    listener_name: str
    event_type: str = ""
    status: ListenerStatus = ListenerStatus.PENDING
    error: Optional[str] = None
    attempts: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def for_event(cls, event: Event, listener_name: str) -> "EventListenerLog":
        """New log for the first delivery of an event to a listener."""
        return cls(
            event_id=event.id,
            listener_name=listener_name,
            event_type=event.event_type,
        )

    @property
    def is_success(self) -> bool:
        return self.status == ListenerStatus.SUCCESS

    def started(self) -> "EventListenerLog":
        """Copy marked pending with one more attempt."""
        return replace(
            self,
            status=ListenerStatus.PENDING,
            error=None,
            attempts=self.attempts + 1,
            updated_at=utcnow(),
        )

    def succeeded(self) -> "EventListenerLog":
        return replace(
            self, status=ListenerStatus.SUCCESS, error=None, updated_at=utcnow()
        )

    def failed(self, error: str) -> "EventListenerLog":
        return replace(
            self, status=ListenerStatus.FAILED, error=error, updated_at=utcnow()
        )
