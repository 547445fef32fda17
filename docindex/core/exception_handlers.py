"""HTTP error responses.

Every error body has the shape ``{"error", "message", "details"?}``.
DocIndexException subclasses are mapped to a status by their error_code.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docindex.core.config import get_settings
from docindex.domain.exceptions import DocIndexException

logger = logging.getLogger(__name__)

_STATUS_BY_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "STORAGE_PERMISSION_ERROR": 400,
    "RESOURCE_NOT_FOUND": 404,
    "STORAGE_NOT_FOUND": 404,
    "DUPLICATE_DOCUMENT": 409,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for_error_code(error_code: str) -> int:
    """HTTP status for an error_code; other STORAGE_* codes are upstream failures (502)."""
    if error_code in _STATUS_BY_CODE:
        return _STATUS_BY_CODE[error_code]
    return 502 if error_code.startswith("STORAGE_") else 400


def _error(status: int, error: str, message: Any, details: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status, content=body)


async def _handle_docindex(request: Request, exc: DocIndexException) -> JSONResponse:
    status = status_for_error_code(exc.error_code)
    if status >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error_code)
    return _error(status, exc.error_code, exc.message, exc.details)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(422, "VALIDATION_ERROR", "Request validation failed", jsonable_encoder(exc.errors()))


async def _handle_http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, "HTTP_ERROR", exc.detail)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocIndexException, _handle_docindex)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http)
    app.add_exception_handler(Exception, _handle_unexpected)
