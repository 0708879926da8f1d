"""Infrastructure modules for the HTTP SMS Manager application.

Centralized infrastructure components:
- configuration: Settings management (Settings and one section per concern)
- events: Event model, dispatcher and idempotent listener execution
- logging: Structured logging (configure_logging, get_module_logger)
- persistence: SQLAlchemy engine, sessions and repositories
- services: Dependency injection providers (SettingsDep, get_settings)
- telemetry: OpenTelemetry tracing
"""
