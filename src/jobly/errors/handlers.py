"""Map JoblyError and request-parsing failures onto the JSON error envelope."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jobly.errors.exceptions import JoblyError, ValidationError
from jobly.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def error_response(request: Request, exc: JoblyError) -> JSONResponse:
    """Render ``exc`` as ``{"error": {code, message, details, trace_id, timestamp}}``."""
    envelope = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            trace_id=getattr(request.state, "trace_id", "unknown"),
            timestamp=datetime.now(timezone.utc),
        ),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.model_dump(mode="json", exclude_none=True),
    )


def _request_error_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        # drop the leading "body"/"query" segment unless it is all there is
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) or ".".join(loc) or "request"
        messages.append(f"{field}: {error.get('msg', 'invalid')}")
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(JoblyError)
    async def jobly_error_handler(request: Request, exc: JoblyError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # a body that is not a JSON object is InvalidInput like any schema miss
        error = ValidationError("Invalid request", details=_request_error_messages(exc))
        return error_response(request, error)
