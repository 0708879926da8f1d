"""Errors for the event dispatch system."""

from infrastructure.persistence.errors import NotFoundError


class ConfigurationError(Exception):
    """Raised when the subscription table is inconsistent.

    Fatal at startup: the application must not serve requests with it.
    """


class DuplicateListenerError(ConfigurationError):
    """Raised when a listener name is subscribed twice to the same event type."""

    def __init__(self, event_type: str, listener_name: str):
        super().__init__(
            f"listener [{listener_name}] is already subscribed to [{event_type}]"
        )
        self.event_type = event_type
        self.listener_name = listener_name


class ListenerExecutionError(Exception):
    """Raised by a listener wrapper when its side effect or its log write failed.

    Attributes:
        listener_name: name of the failed listener
        event_id: id of the event being processed
        reason: what went wrong, without the listener and event prefix
    """

    def __init__(self, listener_name: str, event_id: str, message: str):
        super().__init__(
            f"listener [{listener_name}] failed for event [{event_id}]: {message}"
        )
        self.listener_name = listener_name
        self.event_id = event_id
        self.reason = message


class EventListenerLogNotFoundError(NotFoundError):
    """Raised when no log exists for an (event id, listener name) pair."""

    def __init__(self, event_id: str, listener_name: str):
        super().__init__(
            f"no listener log for event [{event_id}] and listener [{listener_name}]"
        )
        self.event_id = event_id
        self.listener_name = listener_name
