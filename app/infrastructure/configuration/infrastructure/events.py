"""Event delivery infrastructure settings."""

from typing import Optional

from infrastructure.configuration.base import InfrastructureSettings


class EventSettings(InfrastructureSettings):
    """Event dispatcher configuration.

    Environment Variables:
        EVENTS_PERSIST: Store every published event before delivery (default: true)
        EVENTS_PUBLISH_TIMEOUT_SECONDS: Deadline for delivering one event to all
            of its listeners. Listeners not started before the deadline are
            skipped (default: unset, no deadline)
    """

    EVENTS_PERSIST: bool = True
    EVENTS_PUBLISH_TIMEOUT_SECONDS: Optional[float] = None
