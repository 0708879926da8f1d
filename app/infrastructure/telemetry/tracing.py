"""Tracing setup.

Spans are created through the OpenTelemetry API. Until configure_tracing()
installs an SDK provider the API hands out no-op spans, so modules can
create spans unconditionally.
"""

from typing import TYPE_CHECKING, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_NAMESPACE, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def configure_tracing(settings: "Settings") -> Optional[TracerProvider]:
    """Install the SDK tracer provider for this process.

    OpenTelemetry accepts one global provider per process, so only the first
    call installs one. The caller that gets the provider back owns it and
    shuts it down.

    Args:
        settings: Application settings.

    Returns:
        The TracerProvider installed by this call, or None if an SDK
        provider was already installed.
    """
    if isinstance(trace.get_tracer_provider(), TracerProvider):
        logger.debug("tracing_already_configured")
        return None

    resource = Resource.create(
        {
            SERVICE_NAME: settings.telemetry.OTEL_SERVICE_NAME,
            SERVICE_NAMESPACE: settings.telemetry.GCP_PROJECT_ID,
        }
    )
    provider = TracerProvider(resource=resource)
    if settings.telemetry.OTEL_CONSOLE_EXPORT:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    logger.info(
        "tracing_configured",
        service_name=settings.telemetry.OTEL_SERVICE_NAME,
        console_export=settings.telemetry.OTEL_CONSOLE_EXPORT,
    )
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for the given instrumentation scope (usually __name__)."""
    return trace.get_tracer(name)
