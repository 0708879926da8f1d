"""HTTP server infrastructure settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Server and application runtime configuration.

    Environment Variables:
        APP_HTTP_LOGGER: Log every HTTP request when set to true (default: false)
        CORS_ALLOW_ORIGINS: JSON list of allowed CORS origins (default: ["*"])
        API_PREFIX: Prefix for the versioned API routes (default: /v1)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        if settings.server.APP_HTTP_LOGGER:
            app.add_middleware(RequestLoggingMiddleware)
        ```
    """

    APP_HTTP_LOGGER: bool = False
    CORS_ALLOW_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])
    API_PREFIX: str = "/v1"
