from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging import configure_logging
from infrastructure.telemetry import configure_tracing

if TYPE_CHECKING:
    from infrastructure.configuration import Settings
    from server.container import Container


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(log_level=settings.LOG_LEVEL, is_local=settings.is_local)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    container: "Container" = app.state.container
    settings = container.settings
    logger = _get_logger(settings)

    app.state.tracer_provider = configure_tracing(settings)

    logger.info("application_startup")
    _list_configs(settings, logger)
    logger.info(
        "event_subscriptions_loaded",
        subscriptions={
            event_type: [s.listener_name for s in container.dispatcher.subscriptions(event_type)]
            for event_type in container.dispatcher.event_types()
        },
    )

    yield

    logger.info("application_shutdown")

    if app.state.tracer_provider is not None:
        app.state.tracer_provider.shutdown()
    container.engine.dispose()
    logger.info("database_engine_disposed")
