"""Request context binding for structured logging.

Binds request-scoped context (correlation ID, path, method) to every log
entry emitted while a request is processed, including the entries written
by event listeners that run inside the request.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(correlation_id="req-123"):
        logger.info("processing_request")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind request-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique request identifier. Auto-generated if not provided.
        request_path: HTTP request path (e.g., "/v1/messages/send").
        request_method: HTTP method (e.g., "GET", "POST").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation ID bound for the block.

    Example:
        @app.middleware("http")
        async def logging_middleware(request: Request, call_next):
            with bind_request_context(
                correlation_id=request.headers.get("X-Correlation-ID"),
                request_path=request.url.path,
                request_method=request.method,
            ):
                return await call_next(request)
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if request_path is not None:
        context["request_path"] = request_path

    if request_method is not None:
        context["request_method"] = request_method

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())

