"""Authentication and registration exceptions."""


class AuthError(Exception):
    """Base exception for authentication operations."""

    pass


class ConfigurationError(AuthError):
    """Raised when the auth subsystem is missing required configuration."""

    pass


class CredentialsValidationError(AuthError):
    """Raised when submitted credentials do not have the required shape."""

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        super().__init__("Invalid credentials format")


class DuplicateUsernameError(AuthError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Username already taken")


class AuthenticationError(AuthError):
    """Raised when a caller cannot be authenticated."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when login fails.

    Unknown usernames and wrong passwords both raise this error with the
    same message.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class MissingTokenError(AuthenticationError):
    """Raised when a protected request carries no bearer token."""

    def __init__(self) -> None:
        super().__init__("Access denied, token missing")


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token cannot be trusted."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class InvalidSignatureError(InvalidTokenError):
    """Raised when a token is malformed or its signature does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid token signature")


class TokenExpiredError(InvalidTokenError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Token has expired")
