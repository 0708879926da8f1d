"""Tracing infrastructure settings."""

from infrastructure.configuration.base import InfrastructureSettings


class TelemetrySettings(InfrastructureSettings):
    """OpenTelemetry configuration.

    Environment Variables:
        GCP_PROJECT_ID: Project the service runs in, used as the service namespace
        OTEL_SERVICE_NAME: Service name attached to spans (default: http-sms-manager)
        OTEL_CONSOLE_EXPORT: Print finished spans to stdout (default: false)
    """

    GCP_PROJECT_ID: str = ""
    OTEL_SERVICE_NAME: str = "http-sms-manager"
    OTEL_CONSOLE_EXPORT: bool = False
