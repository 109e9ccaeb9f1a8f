"""
FastAPI exception handlers for structured error responses.

Analyzer and reply failures never reach these handlers: the analysis
service turns them into the canonical failure result. Only caller mistakes
and programming errors end up here.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from risk_analyzer.models.request_models import EmptyEmailError

logger = structlog.get_logger(__name__)


def _error_body(error: str, message: str, details=None) -> dict:
    body = {
        "error": error,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        body["details"] = details
    return body


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies (missing or blank emailText, bad JSON).
    
    Maps to 422 Unprocessable Entity. The analyzer is never called.
    """
    errors = jsonable_encoder(exc.errors(), custom_encoder={ValueError: str})
    logger.warning("Invalid request format", error_count=len(errors))
    
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("invalid_request", "Request validation failed", errors),
    )


async def empty_email_error_handler(request: Request, exc: EmptyEmailError) -> JSONResponse:
    """
    Handle the service-level empty input guard.
    
    Maps to 422 Unprocessable Entity.
    """
    logger.warning("Empty email text rejected")
    
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("invalid_request", exc.message),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    EmptyEmailError: empty_email_error_handler,
    Exception: generic_error_handler,
}
