"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service
from src.schemas.auth import (
    LoginResponse,
    LoginUser,
    SignupResponse,
    SignupUser,
    UserLogin,
    UserSignup,
)
from src.services.auth import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with username and password."""
    user = auth.authenticate(credentials.username, credentials.password)

    return LoginResponse(
        message="Login successful",
        user=LoginUser.model_validate(user),
    )


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Create a new account."""
    user = auth.register(user_data.username, user_data.email, user_data.password)

    return SignupResponse(
        message="Account created successfully",
        user=SignupUser.model_validate(user),
    )
