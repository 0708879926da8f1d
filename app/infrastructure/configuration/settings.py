"""HTTP SMS Manager configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.infrastructure import (
    DatabaseSettings,
    EventSettings,
    ServerSettings,
    TelemetrySettings,
)


class Settings(BaseSettings):
    """HTTP SMS Manager configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.

    Environment Variables:
        ENV: Deployment environment. "local" renders human readable logs
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        database_url = settings.database.DATABASE_URL

        if settings.is_local:
            # Local-only behaviour...
        ```
    """

    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    database: DatabaseSettings
    server: ServerSettings
    events: EventSettings
    telemetry: TelemetrySettings

    @property
    def is_local(self) -> bool:
        """Check if the application is running on a developer machine.

        Returns:
            True if ENV is "local", False otherwise.
        """
        return self.ENV == "local"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "database": DatabaseSettings,
            "server": ServerSettings,
            "events": EventSettings,
            "telemetry": TelemetrySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
