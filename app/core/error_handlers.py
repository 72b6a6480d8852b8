"""Global exception handlers.

Three layers: classified ApiError, schema validation failures (ours and
FastAPI's own), and a catch-all that never leaks internal details.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ApiError, RequestValidationFailed

logger = logging.getLogger(__name__)

# FastAPI reports path parameters under "path"; clients know them as "params".
_LOCATION_NAMES = {"path": "params"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.is_client_error:
            logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationFailed)
    async def request_validation_failed_handler(request: Request, exc: RequestValidationFailed):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=exc.to_response(),
        )

    @app.exception_handler(RequestValidationError)
    async def fastapi_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc.errors())
        logger.warning(f"Validation error on {request.url.path}: {errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=RequestValidationFailed(errors).to_response(),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )


def format_validation_errors(errors) -> list[dict]:
    """Flatten pydantic error dicts into ``{path, message}`` pairs."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error["loc"]]
        if loc:
            loc[0] = _LOCATION_NAMES.get(loc[0], loc[0])
        formatted.append({"path": ".".join(loc), "message": error["msg"]})
    return formatted
