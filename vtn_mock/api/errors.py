"""Structured error responses for core errors and malformed requests."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from ..errors import AuthError, VTNError
from ..middleware import get_correlation_id

log = structlog.get_logger()


def error_body(request: Request, error: str, message: str, status_code: int) -> dict:
    return {
        "error": error,
        "message": message,
        "status_code": status_code,
        "correlation_id": get_correlation_id(),
        "path": str(request.url.path),
    }


async def vtn_error_handler(request: Request, exc: VTNError) -> JSONResponse:
    log.warning(
        "request.rejected",
        error_type=exc.__class__.__name__,
        status_code=exc.status_code,
        detail=exc.message,
        path=request.url.path,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.__class__.__name__, exc.message, exc.status_code),
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    log.warning("request.malformed", path=request.url.path, errors=len(errors))
    reason = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in errors
    )
    return JSONResponse(
        status_code=400,
        content=error_body(request, "ValidationError", reason or "Malformed request body", 400),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "unhandled.exception",
        error=str(exc),
        error_type=exc.__class__.__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=error_body(request, "InternalServerError", "An unexpected error occurred", 500),
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(VTNError, vtn_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
