# api/responses.py
"""Response envelope and exception handlers for the HTTP API."""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from infrastructure.logging import get_module_logger
from infrastructure.persistence import NotFoundError, PersistenceError

logger = get_module_logger()


def format_success(message: str, data: Any = None) -> Dict[str, Any]:
    """Format a successful response body."""
    return {"status": "success", "message": message, "data": jsonable_encoder(data)}


def format_error(message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    """Format an error response body."""
    response: Dict[str, Any] = {"status": "error", "message": message}
    if data is not None:
        response["data"] = jsonable_encoder(data)
    return response


async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("resource_not_found", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content=format_error(str(exc))
    )


async def persistence_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("persistence_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=format_error("cannot process the request, please try again later"),
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    logger.info("request_validation_failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=format_error("validation errors while processing the request", errors),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
