"""Exception handlers rendering application errors as JSON."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutrition_impact.errors import NutritionImpactError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the standard error body."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status_code": status_code}},
    )


async def application_error_handler(
    request: Request, exc: NutritionImpactError
) -> JSONResponse:
    """Render expected application failures with their own status code."""
    logger.warning(
        "Application error: %s [%s %s]",
        exc.message,
        request.method,
        request.url.path,
    )
    return error_response(exc.message, exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from the client."""
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(
        INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the application's exception handlers."""
    app.add_exception_handler(NutritionImpactError, application_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
