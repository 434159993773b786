"""Password hashing and verification.

Uses bcrypt, which embeds a fresh random salt and the work factor in
every digest it produces.
"""

import asyncio

import bcrypt

DEFAULT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, hashed_password: str) -> bool:
    """Constant-time comparison against a bcrypt hash.

    Malformed hashes never verify.
    """
    try:
        return bcrypt.checkpw(password.encode(), hashed_password.encode())
    except (ValueError, TypeError):
        return False


class PasswordHasher:
    """Async facade over bcrypt.

    Hashing is CPU-bound, so both operations run in a worker thread and
    leave the event loop free for other requests.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self._rounds)

    async def verify(self, password: str, hashed_password: str) -> bool:
        return await asyncio.to_thread(verify_password, password, hashed_password)
