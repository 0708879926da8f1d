"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the HTTP SMS
Manager using Pydantic BaseSettings with one settings class per concern.

Exports:
    Settings: Main settings class
    DatabaseSettings, EventSettings, ServerSettings, TelemetrySettings:
        Section classes (for testing/overrides)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    database_url = settings.database.DATABASE_URL
    ```
"""

from infrastructure.configuration.infrastructure import (
    DatabaseSettings,
    EventSettings,
    ServerSettings,
    TelemetrySettings,
)
from infrastructure.configuration.settings import Settings

__all__ = [
    "Settings",
    "DatabaseSettings",
    "EventSettings",
    "ServerSettings",
    "TelemetrySettings",
]
