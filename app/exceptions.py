# =============================================================================
# app/exceptions.py - Custom Exceptions & Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error body has the shape {"error": <message>, ...}. Failures at the
# handler boundary are reported to the client with an opaque message and the
# request id; the underlying detail is only written to the server log.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.request_context import REQUEST_ID_HEADER, get_request_id

logger = logging.getLogger(__name__)

NOT_FOUND = "Not found"
INTERNAL_ERROR = "Internal server error"


class BackendException(Exception):
    """
    Base exception for the backend API.

    `message` is safe to show to clients. `details` carries diagnostic
    context for the server log and is never serialized into responses.
    """

    def __init__(
        self,
        message: str,
        code: str = "BACKEND_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self, request_id: str | None = None) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if request_id:
            result["request_id"] = request_id
        return result


# =============================================================================
# Datastore Exceptions
# =============================================================================

class DatastoreError(BackendException):
    """Raised when a datastore read fails (connection, query, or client setup)."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message="Datastore query failed",
            code="DATASTORE_ERROR",
            status_code=500,
            details={"operation": operation, "error": error},
        )


# =============================================================================
# Request Body Exceptions
# =============================================================================

class InvalidJSONBodyError(BackendException):
    """Raised when a JSON request body cannot be parsed."""

    def __init__(self, error: str):
        super().__init__(
            message="Invalid JSON body",
            code="INVALID_JSON",
            status_code=400,
            details={"error": error},
        )


class PayloadTooLargeError(BackendException):
    """Raised when a request body exceeds the configured limit."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            message=f"Request body too large (max: {max_size} bytes)",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            details={"size": size, "max_size": max_size},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def _json_error(request: Request, status_code: int, content: dict[str, Any]) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=content)
    request_id = get_request_id(request)
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def backend_exception_handler(
    request: Request,
    exc: BackendException
) -> JSONResponse:
    """Convert BackendException to JSON response, logging its details."""
    request_id = get_request_id(request)
    if exc.status_code >= 500:
        logger.error(f"[{request_id}] {exc.code} on {request.method} {request.url.path}: {exc.details}")
    else:
        logger.warning(f"[{request_id}] {exc.code} on {request.method} {request.url.path}: {exc.details}")
    return _json_error(request, exc.status_code, exc.to_dict(request_id))


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle routing errors.

    Unknown paths and known paths with the wrong method are both reported as
    a uniform 404.
    """
    if exc.status_code in (404, 405):
        return _json_error(request, 404, {"error": NOT_FOUND})
    return _json_error(request, exc.status_code, {"error": exc.detail})


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors on request parameters."""
    return _json_error(
        request,
        422,
        {
            "error": "Validation error",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Catch-all: log the original error, return a generic 500."""
    request_id = get_request_id(request)
    logger.error(
        f"[{request_id}] Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    content: dict[str, Any] = {"error": INTERNAL_ERROR}
    if request_id:
        content["request_id"] = request_id
    return _json_error(request, 500, content)
