"""
Authentication Router

Handles account endpoints:
- POST /signup: Create an account and receive a token
- POST /login: Exchange email and password for a token

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Tokens are JWTs valid for 24 hours by default
"""

from fastapi import APIRouter, Request, status

from bookreviews.config import get_settings
from bookreviews.dependencies import DbSession
from bookreviews.models.user import User
from bookreviews.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserPublic
from bookreviews.services.accounts import authenticate_user, register_user
from bookreviews.services.rate_limiter import limiter
from bookreviews.services.security import create_access_token

settings = get_settings()

router = APIRouter(
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
    },
)


def _auth_response(request: Request, user: User, message: str) -> AuthResponse:
    token = create_access_token(
        user.id,
        user.username,
        user.email,
        settings=request.app.state.settings,
    )
    return AuthResponse(
        message=message,
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Register with username, email and password (min 6 characters). Returns a bearer token.",
    responses={409: {"description": "Email or username already registered"}},
)
@limiter.limit(settings.rate_limit_auth)
def signup(
    request: Request,
    user_data: SignupRequest,
    db: DbSession,
) -> AuthResponse:
    """
    Register a new user.

    1. Validates body shape and email format (Pydantic)
    2. Checks password length and duplicate email/username
    3. Stores the bcrypt hash
    4. Returns a token so the client is logged in immediately
    """
    user = register_user(db, user_data.username, user_data.email, user_data.password)
    return _auth_response(request, user, "User created successfully")


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a bearer token.

    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
    responses={401: {"description": "Invalid credentials"}},
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    db: DbSession,
) -> AuthResponse:
    """Authenticate a user and return a fresh token."""
    user = authenticate_user(db, credentials.email, credentials.password)
    return _auth_response(request, user, "Login successful")
