"""Auth service — registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
import re
from datetime import datetime, timedelta, timezone

import bcrypt

from domain.model.errors import (
    AccountLockedError,
    DomainError,
    InvalidCredentialsError,
    RegistrationError,
)
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12

# Lockout policy
MAX_FAILED_ACCESS_ATTEMPTS = 5
LOCKOUT_MINUTES = 5

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
LOCKED_OUT_MESSAGE = "User blocked"


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _password_errors(password: str) -> list[dict[str, str]]:
    errors = []
    if len(password) < 8:
        errors.append({"code": "PasswordTooShort",
                       "description": "Password must be at least 8 characters"})
    if not re.search(r"[A-Z]", password):
        errors.append({"code": "PasswordRequiresUpper",
                       "description": "Password must contain at least one uppercase letter"})
    if not re.search(r"[a-z]", password):
        errors.append({"code": "PasswordRequiresLower",
                       "description": "Password must contain at least one lowercase letter"})
    if not re.search(r"[0-9]", password):
        errors.append({"code": "PasswordRequiresDigit",
                       "description": "Password must contain at least one number"})
    return errors


def register(repo: UserRepository, email: str, password: str) -> User:
    """Register a new user with a pre-confirmed email.

    Returns the created User domain object.

    Raises:
        RegistrationError: duplicate email and/or weak password, all reported together
        DomainError: the store refused to create the user
    """
    errors = []
    if repo.get_by_email(email):
        errors.append({"code": "DuplicateEmail",
                       "description": f"Email '{email}' is already taken."})
    errors.extend(_password_errors(password))
    if errors:
        raise RegistrationError(errors)

    user = repo.create(email=email, password_hash=_hash_password(password))
    if not user:
        raise DomainError("Failed to create user")

    logger.info("User registered", extra={"userId": user.id, "email": email})
    return user


def _register_failure(repo: UserRepository, user: User, now: datetime) -> bool:
    """Count a failed attempt. Return True if it locked the account."""
    count = user.access_failed_count + 1
    lockout_end = None
    if count >= MAX_FAILED_ACCESS_ATTEMPTS:
        count = 0
        lockout_end = now + timedelta(minutes=LOCKOUT_MINUTES)

    repo.record_failed_login(user.id, count, lockout_end)
    if lockout_end:
        logger.warning("User locked out", extra={"userId": user.id, "lockoutEnd": lockout_end.isoformat()})
        return True
    return False


def authenticate(repo: UserRepository, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Returns the authenticated User domain object.
    Doesn't reveal whether it was the email or the password that was wrong.

    Raises:
        AccountLockedError: too many failed attempts, lockout still running
        InvalidCredentialsError: invalid credentials (deliberately vague)
    """
    user = repo.get_by_email(email)
    if not user or not user.password_hash:
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    now = datetime.now(timezone.utc)
    if user.is_locked_out(now):
        raise AccountLockedError(LOCKED_OUT_MESSAGE)

    if not _verify_password(password, user.password_hash):
        if _register_failure(repo, user, now):
            raise AccountLockedError(LOCKED_OUT_MESSAGE)
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    # Login succeeds even if the bookkeeping write fails
    repo.record_successful_login(user.id)
    logger.info("User logged in", extra={"userId": user.id, "email": email})
    return user
