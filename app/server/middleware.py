import time

from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import bind_request_context, get_module_logger

logger = get_module_logger()

CORRELATION_ID_HEADER = "X-Correlation-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a correlation id to every log entry written while handling a request.

    The id is taken from the X-Correlation-ID header when present and echoed
    back on the response. With log_requests set, one entry is logged per
    request.
    """

    def __init__(self, app, log_requests: bool = False):
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_ID_HEADER),
            request_path=request.url.path,
            request_method=request.method,
        ) as correlation_id:
            started = time.perf_counter()
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id

            if self.log_requests:
                logger.info(
                    "http_request",
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                    client=request.client.host if request.client else "unknown",
                )
            return response
