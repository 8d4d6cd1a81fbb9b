import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from pod_job_tracker.errors import (
    ConflictRetriesExhaustedError,
    CorruptCounterError,
    InvalidCounterValueError,
    NotFoundError,
    RequestCancelledError,
    StoreUnavailableError,
    ValidationError,
    WriteConflictError,
)

logger = logging.getLogger(__name__)

# nginx convention for a client that closed the connection before the response
CLIENT_CLOSED_REQUEST = 499


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    elif isinstance(exc, RequestCancelledError):
        status_code = CLIENT_CLOSED_REQUEST
        error_type = "request_cancelled"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    logger.info("Request rejected: %s", exc)
    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def counter_error_handler(_: Request, exc: Exception) -> Response:
    """Handle counter update failures (500). The message is shown, the cause is only logged."""
    if isinstance(exc, CorruptCounterError):
        error_type = "corrupt_counter"
    elif isinstance(exc, ConflictRetriesExhaustedError | WriteConflictError):
        error_type = "write_conflict"
    elif isinstance(exc, InvalidCounterValueError):
        error_type = "invalid_counter_value"
    elif isinstance(exc, StoreUnavailableError):
        error_type = "store_unavailable"
    else:
        error_type = "counter_error"

    logger.error("Counter update failed: %s", exc, exc_info=exc)
    return create_json_error_response(status_code=500, message=str(exc), error_type=error_type)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
