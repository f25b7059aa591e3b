"""
User Pydantic Schemas

Schemas:
- SignupRequest: Registration data (username, email, password)
- LoginRequest: Email and password
- UserPublic: What the API returns about a user (never the password)
- AuthResponse: Token plus user, returned by signup and login
"""

from pydantic import EmailStr, Field, field_validator, model_validator

from bookreviews.schemas.base import APIModel


class SignupRequest(APIModel):
    """
    Schema for user registration.

    Example request body:
    {
        "username": "booklover",
        "email": "booklover@example.com",
        "password": "secret123"
    }
    """

    username: str | None = Field(
        default=None,
        max_length=50,
        description="Unique username",
        examples=["booklover"],
    )
    email: EmailStr | None = Field(
        default=None,
        description="User's email address (used for login)",
        examples=["booklover@example.com"],
    )
    password: str | None = Field(
        default=None,
        max_length=128,
        description="Password (min 6 characters)",
        examples=["secret123"],
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v

    @model_validator(mode="after")
    def require_all_fields(self) -> "SignupRequest":
        if not (self.username and self.email and self.password):
            raise ValueError("All fields required")
        return self


class LoginRequest(APIModel):
    """
    Schema for login with email and password.

    The email goes through the same normalization as on signup (domain
    lowercased), so it matches the stored address.
    """

    email: EmailStr | None = Field(default=None, description="Registered email address")
    password: str | None = Field(default=None, description="Account password")

    @model_validator(mode="after")
    def require_credentials(self) -> "LoginRequest":
        if not (self.email and self.password):
            raise ValueError("Email and password required")
        return self


class UserPublic(APIModel):
    """
    Schema for user data in responses.

    SECURITY: Never includes the password hash.
    """

    id: str = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="User's email address")


class AuthResponse(APIModel):
    """Token issued on signup or login."""

    message: str
    token: str = Field(..., description="Bearer token, valid for 24 hours by default")
    user: UserPublic
