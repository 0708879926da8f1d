from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies.rate_limits import setup_rate_limiter
from api.responses import register_exception_handlers
from api.router import api_router, v1_router
from api.routes.docs import router as docs_router
from infrastructure.configuration import Settings
from infrastructure.events import ConfigurationError
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from server.container import Container, build_container
from server.lifespan import lifespan
from server.middleware import RequestContextMiddleware

logger = get_module_logger()


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[Container] = None,
) -> FastAPI:
    """Build the HTTP application.

    Listener registration happens before anything else is installed: a
    ConfigurationError stops the process from starting.

    Args:
        settings: Application settings. Defaults to get_settings().
        container: Prebuilt container. Built from settings when omitted.

    Returns:
        The FastAPI application, with the container on app.state.container.
    """
    if container is None:
        container = build_container(settings or get_settings())
    settings = container.settings

    try:
        container.register_listeners()
    except ConfigurationError as e:
        logger.critical("application_configuration_invalid", error=str(e))
        raise
    container.dispatcher.seal()

    handler = FastAPI(
        title="HTTP SMS Manager",
        version=settings.GIT_SHA,
        lifespan=lifespan,
    )
    handler.state.container = container
    handler.dependency_overrides[get_settings] = lambda: settings

    setup_rate_limiter(handler)
    register_exception_handlers(handler)

    handler.add_middleware(
        RequestContextMiddleware, log_requests=settings.server.APP_HTTP_LOGGER
    )
    handler.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    handler.include_router(api_router)
    handler.include_router(v1_router, prefix=settings.server.API_PREFIX)
    handler.include_router(docs_router)

    logger.info("application_created", api_prefix=settings.server.API_PREFIX)
    return handler
