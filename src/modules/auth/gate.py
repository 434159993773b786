"""Admission check for protected requests."""

import structlog

from src.modules.auth.exceptions import (
    InvalidSignatureError,
    InvalidTokenError,
    MissingTokenError,
    TokenExpiredError,
)
from src.modules.auth.schemas import Identity
from src.modules.auth.tokens import TokenCodec

logger = structlog.get_logger()

BEARER_SCHEME = "bearer"

_REJECTION_REASONS = {
    InvalidSignatureError: "invalid_signature",
    TokenExpiredError: "expired",
}


def extract_bearer_token(authorization: str | None) -> str | None:
    """Pull the token out of an ``Authorization: Bearer <token>`` header.

    Returns None when the header is absent, uses another scheme, or
    carries no token.
    """
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None

    return token.strip() or None


class AuthGate:
    """Resolves the caller's identity from a bearer token.

    Every authenticated caller has the same privileges; the gate does
    identity resolution only.
    """

    def __init__(self, codec: TokenCodec) -> None:
        self._codec = codec

    def admit(self, authorization: str | None) -> Identity:
        """Admit a request carrying the given Authorization header.

        Args:
            authorization: Raw Authorization header value, if any.

        Returns:
            The verified identity.

        Raises:
            MissingTokenError: If no bearer token was presented.
            InvalidSignatureError: If the token is forged or malformed.
            TokenExpiredError: If the token has expired.
        """
        token = extract_bearer_token(authorization)
        if token is None:
            logger.info("request_rejected", reason="missing")
            raise MissingTokenError()

        try:
            return self._codec.verify(token)
        except InvalidTokenError as e:
            reason = _REJECTION_REASONS.get(type(e), "invalid_token")
            logger.info("request_rejected", reason=reason)
            raise
