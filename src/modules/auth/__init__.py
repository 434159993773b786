"""Authentication module: credentials, password hashing, session tokens."""

from src.modules.auth.exceptions import (
    AuthenticationError,
    AuthError,
    ConfigurationError,
    CredentialsValidationError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidSignatureError,
    InvalidTokenError,
    MissingTokenError,
    TokenExpiredError,
)
from src.modules.auth.gate import AuthGate
from src.modules.auth.models import User
from src.modules.auth.password import PasswordHasher, hash_password, verify_password
from src.modules.auth.repository import UserRepository
from src.modules.auth.schemas import (
    Identity,
    LoginRequest,
    LoginResponse,
    UserCredentials,
    UserSummary,
)
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import TokenCodec

__all__ = [
    "AuthError",
    "AuthGate",
    "AuthService",
    "AuthenticationError",
    "ConfigurationError",
    "CredentialsValidationError",
    "DuplicateUsernameError",
    "Identity",
    "InvalidCredentialsError",
    "InvalidSignatureError",
    "InvalidTokenError",
    "LoginRequest",
    "LoginResponse",
    "MissingTokenError",
    "PasswordHasher",
    "TokenCodec",
    "TokenExpiredError",
    "User",
    "UserCredentials",
    "UserRepository",
    "UserSummary",
    "hash_password",
    "verify_password",
]
