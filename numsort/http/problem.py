"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that produce
application/problem+json responses.
"""

from __future__ import annotations

from typing import Any, Dict
import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from numsort.http.error_mapping import (
    INTERNAL_ERROR,
    REQUEST_BODY_INVALID,
    STORE_TIMEOUT,
    STORE_UNAVAILABLE,
)
from numsort.http.request_id import REQUEST_ID_HEADER
from numsort.logic.errors import OperationError

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem(entry: Dict[str, Any], detail: str, **extra: Any) -> JSONResponse:
    body = {
        "title": entry["title"],
        "status": entry["status"],
        "detail": detail,
        "code": entry["code"],
    }
    body.update(extra)
    return JSONResponse(body, status_code=entry["status"], media_type=PROBLEM_MEDIA_TYPE)


async def handle_operation_error(request: Request, exc: OperationError) -> JSONResponse:
    entry = STORE_TIMEOUT if exc.timed_out else STORE_UNAVAILABLE
    logger.debug(
        "operation_error op=%s path=%s status=%s cause=%s",
        exc.operation,
        request.url.path,
        entry["status"],
        exc.cause,
    )
    return problem(entry, f"{exc.operation} could not complete", operation=exc.operation)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    status_code = int(exc.status_code or 500)
    if isinstance(exc.detail, dict):
        body = dict(exc.detail)
    else:
        body = {"title": "Error", "status": status_code, "detail": str(exc.detail or "")}
    return JSONResponse(
        body,
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=dict(exc.headers) if exc.headers else None,
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("validation_422 path=%s errors_cnt=%d", request.url.path, len(exc.errors()))
    return problem(
        REQUEST_BODY_INVALID,
        "Request validation failed",
        errors=jsonable_encoder(exc.errors()),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    response = problem(INTERNAL_ERROR, "Unexpected server error")
    # Sent by ServerErrorMiddleware, outside RequestIdMiddleware
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem",
    "handle_operation_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
