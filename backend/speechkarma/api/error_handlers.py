"""Error Handlers - global exception handlers for the SpeechKarma API.

Invariants:
    - SpeechKarmaError -> its own envelope and HTTP status
    - RequestValidationError (bad JSON, query or body) -> 400 VALIDATION_ERROR
      with per-field details; library messages for known fields (email) are
      replaced with user-facing wording
    - Exception (catch-all) -> 500 INTERNAL_ERROR, never leaks internal details

Design Decisions:
    - Log level follows the error's severity: a 404 is not an operational alarm
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from speechkarma.core.domain_types import ErrorCode
from speechkarma.core.errors import ErrorSeverity, SpeechKarmaError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SpeechKarmaError)
    async def speechkarma_error_handler(request: Request, exc: SpeechKarmaError):
        logger.log(
            _LOG_LEVELS.get(exc.severity, logging.ERROR),
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code.value, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": ErrorCode.VALIDATION_ERROR.value},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "message": "An unexpected error occurred",
                    "code": ErrorCode.INTERNAL_ERROR.value,
                },
            },
        )


def _field_name(loc: tuple) -> str:
    # drop the "body"/"query"/"path" prefix FastAPI puts on every location
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


# Library validators (EmailStr) word their errors for developers
FIELD_MESSAGES = {
    "email": "Please enter a valid email address.",
}


def _clean_message(field: str, error: dict) -> str:
    if error.get("type") == "value_error" and field in FIELD_MESSAGES:
        return FIELD_MESSAGES[field]
    # pydantic prefixes ValueError text raised in validators
    return error.get("msg", "").removeprefix("Value error, ")


def build_validation_error_response(exc: RequestValidationError) -> dict:
    errors = exc.errors()
    fields = []
    for e in errors:
        field = _field_name(tuple(e.get("loc", ())))
        fields.append({
            "field": field,
            "message": _clean_message(field, e),
            "type": e.get("type"),
        })
    message = fields[0]["message"] if len(fields) == 1 else "Invalid request data"
    return {
        "error": {
            "message": message or "Invalid request data",
            "code": ErrorCode.VALIDATION_ERROR.value,
            "details": {"fields": fields},
        },
    }
