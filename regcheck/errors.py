"""Exception handling for the regcheck HTTP surface.

Provides JSON error responses for HTTP and unexpected exceptions and a
helper to register these handlers on the app.

The availability endpoint itself never relies on these handlers for store
failures (the checker already turns them into an ERROR verdict). They cover
caller contract violations such as a missing `email` parameter and any bug
outside the checker.

Security:
- Internal error details are never exposed to clients
- Unexpected exceptions are logged with full traceback
- Log level varies by error type (4xx = warning, 5xx = error)
"""

import logging

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("regcheck.errors")


def error_payload(message: str) -> dict:
    return {"ok": False, "error": {"message": message}}


async def http_exc(request: Request, exc: HTTPException) -> Response:
    """Handle Starlette HTTPException as a JSON error body."""
    message = str(exc.detail) if exc.detail else "An error occurred"
    if exc.status_code >= 500:
        logger.error("HTTP %d on %s: %s", exc.status_code, request.url.path, message)
    else:
        logger.warning("HTTP %d on %s: %s", exc.status_code, request.url.path, message)
    return JSONResponse(
        error_payload(message),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def any_exc(request: Request, exc: Exception) -> Response:
    """Fallback handler for unexpected exceptions.

    Always returns a generic 500 without leaking internal details.
    """
    client_ip = request.client.host if request.client else None
    logger.error(
        "Unhandled exception: %s (type=%s path=%s method=%s client=%s)",
        exc,
        type(exc).__name__,
        request.url.path,
        request.method,
        client_ip,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(error_payload("Internal server error"), status_code=500)


def register_exception_handlers(app: Starlette) -> None:
    """Attach default exception handlers to a Starlette app.

    Registers:
        - HTTPException -> http_exc
        - Exception     -> any_exc
    """
    app.add_exception_handler(HTTPException, http_exc)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, any_exc)
