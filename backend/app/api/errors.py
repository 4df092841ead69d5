"""Exception handlers rendering engine errors as JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.errors import EngineError, ErrorCode

logger = logging.getLogger(__name__)


def _field_path(loc: tuple) -> str:
    """Render a pydantic error location as e.g. ``stops[2].city_id``."""
    path = ""
    for part in loc:
        if part == "body":
            continue
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _error_body(code: str, message: str, details: dict) -> dict:
    return {"error": {"code": code, "message": message, "details": details}}


async def handle_engine_error(request: Request, exc: EngineError) -> JSONResponse:
    """Render an EngineError with its status code and details."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"{exc.error_code.value} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "structured": {
                "error_code": exc.error_code.value,
                "status_code": exc.status_code,
                "details": exc.details,
                "request_path": request.url.path,
            }
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code.value, exc.message, exc.details),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render schema failures as 400 with the offending field path."""
    errors = [
        {
            "field": _field_path(err["loc"]),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    first = errors[0] if errors else {"field": None, "message": "Invalid request"}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            ErrorCode.VALIDATION_ERROR.value,
            first["message"],
            {"field": first["field"], "errors": errors},
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach engine and schema error handlers to the app."""
    app.add_exception_handler(EngineError, handle_engine_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
