"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.database import DatabaseSettings
from infrastructure.configuration.infrastructure.events import EventSettings
from infrastructure.configuration.infrastructure.server import ServerSettings
from infrastructure.configuration.infrastructure.telemetry import TelemetrySettings

__all__ = [
    "DatabaseSettings",
    "EventSettings",
    "ServerSettings",
    "TelemetrySettings",
]
