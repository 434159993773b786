"""Authentication service for registration and login."""

from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from src.infrastructure.observability import add_span_attributes, traced
from src.modules.auth.exceptions import (
    CredentialsValidationError,
    InvalidCredentialsError,
)
from src.modules.auth.models import User
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository
from src.modules.auth.schemas import LoginRequest, LoginResponse, UserCredentials
from src.modules.auth.tokens import TokenCodec

logger = structlog.get_logger()

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def format_validation_errors(error: ValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into ``{field, message}`` pairs."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
        }
        for err in error.errors()
    ]


def _validate(schema: type[SchemaT], **fields: object) -> SchemaT:
    try:
        return schema(**fields)
    except ValidationError as e:
        raise CredentialsValidationError(format_validation_errors(e)) from e


class AuthService:
    """Service for authentication operations.

    Composes the credential store, the password hasher and the token
    codec. Within a request, validation runs before any store access,
    and store access completes before a token is issued.
    """

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        codec: TokenCodec,
    ) -> None:
        """Initialize the auth service.

        Args:
            repository: User repository for database operations.
            hasher: Password hasher.
            codec: Session token codec.
        """
        self._repo = repository
        self._hasher = hasher
        self._codec = codec

    @traced("auth.register")
    async def register(self, username: str, password: str) -> User:
        """Register a new user.

        Args:
            username: Requested username.
            password: Plain text password.

        Returns:
            The created User.

        Raises:
            CredentialsValidationError: If username or password is malformed.
            DuplicateUsernameError: If the username is already taken.
        """
        data = _validate(UserCredentials, username=username, password=password)

        hashed = await self._hasher.hash(data.password)
        user = await self._repo.create(data.username, hashed)

        add_span_attributes({"user.id": user.id})
        logger.info("user_registered", user_id=user.id, username=user.username)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """Authenticate a user by username and password.

        Args:
            username: User's username.
            password: Plain text password.

        Returns:
            The authenticated User.

        Raises:
            InvalidCredentialsError: If the user does not exist or the
                password does not match.
        """
        user = await self._repo.get_by_username(username)

        if user is None:
            logger.warning("auth_failed_user_not_found", username=username)
            raise InvalidCredentialsError()

        if not await self._hasher.verify(password, user.hashed_password):
            logger.warning("auth_failed_invalid_password", username=username)
            raise InvalidCredentialsError()

        logger.info("user_authenticated", user_id=user.id, username=username)
        return user

    @traced("auth.login")
    async def login(self, username: str, password: str) -> LoginResponse:
        """Authenticate user and issue a session token.

        Args:
            username: User's username.
            password: Plain text password.

        Returns:
            LoginResponse with the token and its lifetime.

        Raises:
            CredentialsValidationError: If the request is malformed.
            InvalidCredentialsError: If authentication fails.
        """
        data = _validate(LoginRequest, username=username, password=password)
        user = await self.authenticate(data.username, data.password)

        return LoginResponse(
            token=self._codec.issue(user.id, user.username),
            token_type="bearer",  # nosec B106 - OAuth2 token type, not a password
            expires_in=self._codec.expires_in,
        )

    async def get_user(self, user_id: int) -> User | None:
        """Get a user by id."""
        return await self._repo.get_by_id(user_id)

    async def list_users(self) -> list[User]:
        """List all users ordered by id."""
        return await self._repo.list_all()
