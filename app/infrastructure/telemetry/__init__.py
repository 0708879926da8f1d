"""OpenTelemetry tracing for the HTTP SMS Manager."""

from infrastructure.telemetry.tracing import configure_tracing, get_tracer

__all__ = ["configure_tracing", "get_tracer"]
