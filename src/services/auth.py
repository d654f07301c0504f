"""Authentication service for login, signup and password handling."""

import logging
import re
from functools import lru_cache

from fastapi import HTTPException, status
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.user import User

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

INVALID_CREDENTIALS = "Invalid username or password"
USERNAME_TAKEN = "Username already exists"
EMAIL_TAKEN = "Email already registered"


@lru_cache
def get_password_context(rounds: int = 12) -> CryptContext:
    """Password hashing context for a bcrypt cost factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return get_password_context().verify(plain_password, hashed_password)


def get_password_hash(password: str, rounds: int = 12) -> str:
    """Hash a password."""
    return get_password_context(rounds).hash(password)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _conflict(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)


def validate_signup(username: str | None, email: str | None, password: str | None) -> None:
    """Validate signup fields, raising a 400 for the first problem found."""
    if not username or not email or not password:
        raise _bad_request("Username, email, and password are required")

    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise _bad_request(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )

    if not USERNAME_PATTERN.fullmatch(username):
        raise _bad_request("Username can only contain letters, numbers, and underscores")

    if not EMAIL_PATTERN.fullmatch(email):
        raise _bad_request("Please enter a valid email address")

    if len(password) < PASSWORD_MIN_LENGTH:
        raise _bad_request(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")


class AuthService:
    """Login and signup against the ``users`` table."""

    def __init__(self, db: Session, bcrypt_rounds: int = 12):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def authenticate(self, username: str | None, password: str | None) -> User:
        """Return the user for valid credentials.

        An unknown username and a wrong password raise the same 401 so the
        response does not reveal which one was wrong.
        """
        if not username or not password:
            raise _bad_request("Username and password are required")

        user = get_user_by_username(self.db, username)
        if not user or not verify_password(password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_CREDENTIALS,
            )
        return user

    def register(self, username: str | None, email: str | None, password: str | None) -> User:
        """Validate and create a new user."""
        validate_signup(username, email, password)

        if get_user_by_username(self.db, username):
            raise _conflict(USERNAME_TAKEN)

        if get_user_by_email(self.db, email):
            raise _conflict(EMAIL_TAKEN)

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password, self.bcrypt_rounds),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent signup can win the race between the checks above and this insert
            self.db.rollback()
            message = str(e.orig).lower()
            if "username" in message:
                raise _conflict(USERNAME_TAKEN) from e
            if "email" in message:
                raise _conflict(EMAIL_TAKEN) from e
            raise
        self.db.refresh(user)

        logger.info(f"New user registered: {user.username} (ID: {user.id})")
        return user
