"""Authentication and user API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.modules.auth.dependencies import (
    AuthenticatedRoute,
    CurrentIdentity,
    get_auth_service,
)
from src.modules.auth.schemas import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterResponse,
    UserCredentials,
    UserSummary,
)
from src.modules.auth.service import AuthService

router = APIRouter(tags=["authentication"])

# Every route on this router requires a valid bearer token
users_router = APIRouter(tags=["users"], route_class=AuthenticatedRoute)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    data: UserCredentials,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """Register a new user. The password is never echoed back."""
    await auth_service.register(data.username, data.password)
    return RegisterResponse()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login with username and password",
    description="Authenticate and receive a session token.",
)
async def login(
    data: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    return await auth_service.login(data.username, data.password)


@users_router.get(
    "/users",
    response_model=list[UserSummary],
    summary="List users",
)
async def list_users(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> list[UserSummary]:
    users = await auth_service.list_users()
    return [UserSummary(id=user.id, username=user.username) for user in users]


@users_router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
)
async def profile(
    identity: CurrentIdentity,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ProfileResponse:
    user = await auth_service.get_user(identity.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return ProfileResponse(username=user.username)
