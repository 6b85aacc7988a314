"""
Error mapper: global exception handlers producing the uniform JSON envelopes.

    - 404 of any origin          -> 404 {code, message} with a fixed message
    - other HTTP faults          -> status, {code, message=detail}
    - ValidationFailed           -> 400 [{code, message}, ...]
    - RequestValidationError     -> 400 [{code: VALIDATION_ERROR, message}, ...]
    - anything else              -> 500 {code: 500, message: str(exc)}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import ValidationFailed
from app.schemas.errors import ErrorResponse
from app.services.customer_validation import GENERIC, issue

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Resource not found."


def error_body(exc: Exception) -> tuple[int, ErrorResponse]:
    """Map a non-validation fault to (status, body). Total over all exceptions."""
    if isinstance(exc, StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return exc.status_code, ErrorResponse(code=404, message=NOT_FOUND_MESSAGE)
        return exc.status_code, ErrorResponse(code=exc.status_code, message=str(exc.detail))
    return status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(code=500, message=str(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        status_code, body = error_body(exc)
        return JSONResponse(
            status_code=status_code,
            content=body.model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
        logger.info("Validation failed on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=[i.model_dump() for i in exc.issues],
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        logger.info("Request validation error on %s: %s", request.url.path, jsonable_encoder(errors))
        issues = [issue(GENERIC) for _ in errors] or [issue(GENERIC)]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=[i.model_dump() for i in issues],
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
        status_code, body = error_body(exc)
        return JSONResponse(status_code=status_code, content=body.model_dump())
