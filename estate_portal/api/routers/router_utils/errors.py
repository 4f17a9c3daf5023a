"""
Error mapping for HTTP responses.

Domain exceptions carry user-safe messages; this module turns them into
status codes and JSON bodies. Details stay in the logs.

Dependencies: fastapi, pydantic
System role: Exception to HTTP translation
"""

import logging

import pydantic
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from estate_portal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DataApiError,
    EstatePortalException,
    PropertyNotFoundError,
    TrackerNotFoundError,
    TrackerStateError,
    TriggerError,
    UploadError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[EstatePortalException], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    PropertyNotFoundError: 404,
    TrackerNotFoundError: 404,
    TrackerStateError: 409,
    TriggerError: 502,
    UploadError: 502,
    DataApiError: 502,
}


def status_for(exc: EstatePortalException) -> int:
    """Most specific status code registered for the exception's class."""
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 500


def validation_error_from(exc: pydantic.ValidationError) -> ValidationError:
    """First field error of a pydantic failure as a domain ValidationError."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or None
    message = first.get("msg", "Invalid input").removeprefix("Value error, ")
    return ValidationError(message, field=field, details={"error_count": exc.error_count()})


def _error_body(exc: EstatePortalException) -> dict:
    body = {"detail": exc.message}
    field = exc.details.get("field")
    if field:
        body["field"] = field
    return body


async def portal_exception_handler(request: Request, exc: EstatePortalException) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        f"{__name__}:portal_exception_handler - {request.method} {request.url.path} "
        f"-> {status_code} {type(exc).__name__}: {exc}"
    )
    return JSONResponse(status_code=status_code, content=_error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or None
    message = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
    body = {"detail": message}
    if field:
        body["field"] = field
    return JSONResponse(status_code=400, content=body)
