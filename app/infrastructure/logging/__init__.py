"""Structured logging with structlog.

Public API:
    - configure_logging(): (Re)configure structlog and the root logger
    - get_module_logger(): Logger bound to the calling module
    - bind_request_context(): Context manager for request-scoped fields

Example:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.context import bind_request_context
from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
]
