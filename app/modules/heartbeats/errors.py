"""Errors for the heartbeats module."""

from infrastructure.persistence.errors import NotFoundError


class HeartbeatMonitorNotFoundError(NotFoundError):
    """Raised when a phone has never sent a heartbeat."""

    def __init__(self, owner: str):
        super().__init__(f"cannot find heartbeat monitor for [{owner}]")
        self.owner = owner
