"""Email availability endpoint.

GET /api/auth/check-email?email=<candidate>

Response body (always, for any present `email` parameter):
    {"available": bool, "email": str, "normalizedEmail": str,
     "message": str, "reason": "AVAILABLE" | "EMAIL_EXISTS" | "ERROR"}

Status mapping:
    - AVAILABLE / EMAIL_EXISTS -> 200
    - blank email              -> 200 (unavailable, not a fault)
    - store failure (ERROR)    -> 500, body still carries the verdict
"""

from __future__ import annotations

from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from regcheck.checker import AvailabilityChecker, AvailabilityReason, AvailabilityResult


def status_for(result: AvailabilityResult) -> int:
    """Map a verdict to an HTTP status code."""
    # Blank input is the only ERROR produced without a lookup key.
    if result.reason is AvailabilityReason.ERROR and result.normalized_email:
        return 500
    return 200


async def check_email(request: Request) -> JSONResponse:
    email = request.query_params.get("email")
    if email is None:
        raise HTTPException(status_code=400, detail="Missing required query parameter: email")

    checker: AvailabilityChecker = request.app.state.checker
    result = await run_in_threadpool(checker.check_availability, email)
    return JSONResponse(result.to_dict(), status_code=status_for(result))


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"ok": True})


routes = [
    Route("/api/auth/check-email", check_email, methods=["GET"], name="check_email"),
    Route("/health", health, methods=["GET"], name="health"),
]
