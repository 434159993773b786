"""Generic HTTP error responses.

Every error body uses ``message`` (and ``errors`` for validation
failures) instead of FastAPI's default ``detail``.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException


def format_request_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten request validation errors into ``{field, message}`` pairs.

    The leading location segment (``body``, ``path``, ``query``) is
    dropped when a field name follows it.
    """
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if len(loc) > 1:
            loc = loc[1:]
        errors.append({"field": ".".join(loc), "message": str(err.get("msg", ""))})
    return errors


async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed requests with 400 instead of 422."""
    return JSONResponse(status_code=400, content={"errors": format_request_errors(exc)})


async def http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )
