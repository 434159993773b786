"""Signed, expiring session tokens."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt
import structlog

from src.modules.auth.exceptions import (
    ConfigurationError,
    InvalidSignatureError,
    InvalidTokenError,
    TokenExpiredError,
)
from src.modules.auth.schemas import Identity

logger = structlog.get_logger()

DEFAULT_EXPIRE_SECONDS = 3600


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenCodec:
    """Issues and verifies HMAC-signed JWT session tokens.

    Tokens carry ``sub`` (user id), ``username``, ``iat`` and ``exp``.
    Verification checks the signature before any claim is read; expiry
    is then checked against the codec's own clock, so an expired token
    is only reported as expired when its signature is genuine.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        expire_seconds: int = DEFAULT_EXPIRE_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the codec.

        Args:
            secret: Signing secret shared by every token operation.
            algorithm: HMAC algorithm used for signing.
            expire_seconds: Token lifetime in seconds.
            clock: Returns the current UTC time.

        Raises:
            ConfigurationError: If the secret is empty.
        """
        if not secret:
            raise ConfigurationError("A signing secret is required for session tokens")

        self._secret = secret
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds
        self._clock = clock

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self._expire_seconds

    def issue(self, user_id: int, username: str) -> str:
        """Create a signed token for a user.

        Args:
            user_id: The user's id.
            username: The user's username.

        Returns:
            Encoded token string.
        """
        now = self._clock()
        expires = now + timedelta(seconds=self._expire_seconds)

        # JWT requires integer timestamps for exp and iat
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }

        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """Verify a token and return the identity it binds.

        Args:
            token: Encoded token string.

        Returns:
            The identity the token was issued for.

        Raises:
            InvalidSignatureError: If the token is malformed or forged.
            TokenExpiredError: If the token is genuine but past its expiry.
            InvalidTokenError: If a genuine token has unusable claims.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "username", "iat", "exp"],
                },
            )
        except jwt.InvalidTokenError as e:
            logger.warning("token_invalid_signature", error_type=type(e).__name__)
            raise InvalidSignatureError() from e

        now = int(self._clock().timestamp())
        if now >= int(claims["exp"]):
            logger.warning("token_expired", sub=claims["sub"])
            raise TokenExpiredError()

        try:
            return Identity(user_id=int(claims["sub"]), username=claims["username"])
        except (TypeError, ValueError) as e:
            logger.warning("token_claims_invalid", error=str(e))
            raise InvalidTokenError() from e
