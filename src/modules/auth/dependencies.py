"""FastAPI dependencies and exception handlers for authentication."""

from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Depends, Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from src.modules.auth.exceptions import (
    CredentialsValidationError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
from src.modules.auth.gate import AuthGate
from src.modules.auth.schemas import Identity
from src.modules.auth.service import AuthService


def get_auth_service(request: Request) -> AuthService:
    """Get the auth service built by the application factory."""
    service: AuthService = request.app.state.auth_service
    return service


def get_auth_gate(request: Request) -> AuthGate:
    """Get the auth gate built by the application factory."""
    gate: AuthGate = request.app.state.auth_gate
    return gate


def authenticate_request(
    request: Request,
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
) -> Identity:
    """Admit the request or short-circuit it.

    The resolved identity is stored on ``request.state.identity``.

    Raises:
        MissingTokenError: If no bearer token was sent.
        InvalidTokenError: If the token is forged, malformed or expired.
    """
    identity = gate.admit(request.headers.get("Authorization"))
    request.state.identity = identity
    return identity


class AuthenticatedRoute(APIRoute):
    """Route that runs the auth gate before anything else.

    Use as ``APIRouter(route_class=AuthenticatedRoute)``. The gate runs
    before the request body is read or validated, so an unauthenticated
    request is rejected with 401/403 whatever its body contains.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def gated_handler(request: Request) -> Response:
            authenticate_request(request, get_auth_gate(request))
            return await handler(request)

        return gated_handler


def get_identity(request: Request) -> Identity:
    """Identity attached by ``AuthenticatedRoute``."""
    identity: Identity = request.state.identity
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_identity)]


async def credentials_validation_handler(
    _request: Request, exc: CredentialsValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": exc.errors})


async def duplicate_username_handler(
    _request: Request, exc: DuplicateUsernameError
) -> JSONResponse:
    message = str(exc)
    return JSONResponse(
        status_code=400,
        content={
            "message": message,
            "errors": [{"field": "username", "message": message}],
        },
    )


async def invalid_credentials_handler(
    _request: Request, exc: InvalidCredentialsError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def missing_token_handler(
    _request: Request, exc: MissingTokenError
) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"message": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def invalid_token_handler(
    _request: Request, _exc: InvalidTokenError
) -> JSONResponse:
    """Answer every token failure the same way.

    Forged and expired tokens stay distinct in logs and exception types
    but look identical to the caller.
    """
    return JSONResponse(status_code=403, content={"message": "Invalid token"})
