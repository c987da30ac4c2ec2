"""Error responses for the account API.

Every failure leaves the service with the same body:
{"error", "message", "message_key", "details", "request_id"}. Domain errors
carry their own code and message key; framework errors are mapped here.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import FlowerRateException

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "SELF_ACTION_FORBIDDEN": 403,
    "PROTECTED_ACCOUNT": 403,
    "RESOURCE_NOT_FOUND": 404,
    "PRECONDITION_FAILED": 409,
    "ALREADY_CONFIRMED": 409,
    "NOT_CONFIRMED": 409,
    "PERSISTENCE_ERROR": 500,
}


def status_for(exc: FlowerRateException) -> int:
    """HTTP status for a domain exception (400 for unmapped codes)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _error_response(
    request: Request,
    status: int,
    body: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content = {"message_key": None, "details": None, **body}
    content["request_id"] = getattr(request.state, "request_id", None)
    return JSONResponse(status_code=status, content=content, headers=headers)


def validation_details(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic errors reduced to loc/msg/type (ctx and input may not serialize)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


async def _on_domain_error(request: Request, exc: FlowerRateException) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(
            "%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message
        )
    return _error_response(request, status, exc.to_dict())


async def _on_invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        request,
        422,
        {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": validation_details(exc),
        },
    )


async def _on_rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit hit on %s %s: %s", request.method, request.url.path, exc.detail)
    return _error_response(
        request,
        429,
        {"error": "RATE_LIMITED", "message": f"Rate limit exceeded: {exc.detail}"},
    )


async def _on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(
        request,
        exc.status_code,
        {"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _on_unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(request, 500, {"error": "INTERNAL_ERROR", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above; call once from create_app()."""
    app.add_exception_handler(FlowerRateException, _on_domain_error)
    app.add_exception_handler(RequestValidationError, _on_invalid_request)
    app.add_exception_handler(RateLimitExceeded, _on_rate_limited)
    app.add_exception_handler(StarletteHTTPException, _on_http_error)
    app.add_exception_handler(Exception, _on_unhandled)
