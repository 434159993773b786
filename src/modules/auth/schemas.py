"""Pydantic schemas for authentication API."""

from pydantic import BaseModel, Field, field_validator

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class UserCredentials(BaseModel):
    """Schema for registering a new user."""

    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """Schema for login request."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    """Schema for login response with the session token."""

    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until expiration


class RegisterResponse(BaseModel):
    """Schema for a successful registration."""

    message: str = "User registered successfully"


class UserSummary(BaseModel):
    """Public view of a user (never includes the password hash)."""

    id: int
    username: str


class ProfileResponse(BaseModel):
    """Schema for the caller's own profile."""

    username: str


class Identity(BaseModel):
    """Identity resolved from a verified session token."""

    user_id: int
    username: str
