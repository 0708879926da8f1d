"""Structlog configuration for the HTTP SMS Manager.

Every entry carries the pid and hostname of the instance that wrote it, the
log level, a UTC ISO timestamp and its call site, plus whatever request
context is bound (see context.bind_request_context). Entries render as
console lines when ENV is "local" and as one JSON object per line
everywhere else.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("message_sent", message_id="123")
"""

import inspect
import logging
import os
import socket
import sys
from functools import lru_cache
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import EventDict, Processor, WrappedLogger

from infrastructure.services.providers import get_settings

# Anything above CRITICAL silences the root logger
SILENT = logging.CRITICAL + 1


@lru_cache(maxsize=1)
def _hostname() -> str:
    return socket.gethostname()


def add_process_fields(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the pid and hostname of the process writing the entry."""
    event_dict.setdefault("pid", os.getpid())
    event_dict.setdefault("hostname", _hostname())
    return event_dict


def build_processors(is_local: bool) -> List[Processor]:
    """Processor chain shared by every logger, ending with the renderer."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        add_process_fields,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer() if is_local else structlog.processors.JSONRenderer(),
    ]


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules


def configure_logging(
    log_level: Optional[str] = None,
    is_local: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; the last call wins. Under pytest the root
    logger is silenced whatever the arguments.

    Args:
        log_level: Level name (DEBUG, INFO, ...). Defaults to settings.LOG_LEVEL.
        is_local: Console output when true, JSON otherwise. Defaults to
            settings.is_local.

    Returns:
        A logger using the new configuration.
    """
    if _running_under_pytest():
        level = SILENT
        local_mode = bool(is_local)
    else:
        settings = get_settings()
        level_name = (log_level or settings.LOG_LEVEL).upper()
        level = getattr(logging, level_name, logging.INFO)
        local_mode = settings.is_local if is_local is None else is_local

    structlog.configure(
        processors=build_processors(local_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Binds ``component`` (last part of the module name) and ``module_path``,
    e.g. {"component": "service", "module_path": "modules.messages.service"}.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
