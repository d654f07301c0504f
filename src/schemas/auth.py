"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict


class UserLogin(BaseModel):
    """Login form submission.

    Fields are optional so that missing values produce the form's own 400 message
    instead of a framework validation error.
    """

    username: str | None = None
    password: str | None = None


class UserSignup(BaseModel):
    """Signup form submission."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginUser(BaseModel):
    """User summary returned after login."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class SignupUser(LoginUser):
    """User summary returned after signup."""

    email: str


class LoginResponse(BaseModel):
    """Successful login response."""

    success: bool = True
    message: str
    user: LoginUser


class SignupResponse(BaseModel):
    """Successful signup response."""

    success: bool = True
    message: str
    user: SignupUser
