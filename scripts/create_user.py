#!/usr/bin/env python3
"""CLI script to register users without going through the HTTP API.

Usage:
    python scripts/create_user.py alice secret1
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add the project root to the path so we can import the application
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from src.config import Settings
from src.infrastructure.database import init_database
from src.modules.auth.exceptions import (
    CredentialsValidationError,
    DuplicateUsernameError,
)
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import TokenCodec


async def create_user(settings: Settings, username: str, password: str) -> int:
    """Register a user and return the process exit code."""
    db = await init_database(settings.database_path)

    try:
        auth_service = AuthService(
            UserRepository(db),
            PasswordHasher(rounds=settings.bcrypt_rounds),
            TokenCodec(settings.jwt_secret_key.get_secret_value()),
        )
        user = await auth_service.register(username, password)
    except CredentialsValidationError as e:
        for error in e.errors:
            print(f"✗ {error['field']}: {error['message']}", file=sys.stderr)
        return 1
    except DuplicateUsernameError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1
    finally:
        await db.disconnect()

    print(f"✓ Created user: {user.username}")
    print(f"  User ID: {user.id}")
    return 0


def main() -> None:
    """Parse arguments and create user."""
    parser = argparse.ArgumentParser(
        description="Register a user in the items service database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/create_user.py alice secret1
  DATABASE_PATH=/tmp/items.db python scripts/create_user.py bob hunter22
        """,
    )
    parser.add_argument("username", help="Username (must be unique)")
    parser.add_argument("password", help="Password (min 6 characters)")
    args = parser.parse_args()

    try:
        settings = Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]).upper()
            print(f"✗ Config error: {field}: {error['msg']}", file=sys.stderr)
        sys.exit(1)

    sys.exit(asyncio.run(create_user(settings, args.username, args.password)))


if __name__ == "__main__":
    main()
