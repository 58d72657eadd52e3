"""Account store: create users with unique email/username and verify login credentials."""

import logging
from functools import lru_cache

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.models import User
from app.schemas.auth import SignupRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

PROFILE_COLUMNS = (
    "organization",
    "industry",
    "specialty_line",
    "years_exp",
    "avg_claims_per_month",
    "reinsurer_type",
)


class AccountError(Exception):
    """Base class for account store failures that are safe to show to the caller."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EmailInUseError(AccountError):
    def __init__(self) -> None:
        super().__init__("Email already in use")


class UsernameInUseError(AccountError):
    def __init__(self) -> None:
        super().__init__("Username already in use")


class InvalidCredentialsError(AccountError):
    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


@lru_cache
def _dummy_password_hash() -> str:
    """Hash compared against when the email is unknown, so both failure paths cost one bcrypt check."""
    return hash_password("unknown-account-placeholder")


def _classify_conflict(db: Session, email: str, username: str) -> AccountError:
    """Decide which unique column a rejected insert collided with (email wins)."""
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        return EmailInUseError()
    if db.scalar(select(User.id).where(User.username == username)) is not None:
        return UsernameInUseError()
    # Row was removed again before we looked; report the email as taken.
    return EmailInUseError()


def create_account(db: Session, signup: SignupRequest, rounds: int | None = None) -> User:
    """
    Persist a new user. Uniqueness is enforced by the database's unique indexes;
    a rejected insert is rolled back and reported as EmailInUseError or UsernameInUseError.
    """
    values = {column: None for column in PROFILE_COLUMNS}
    values.update(signup.profile_fields())
    user = User(
        email=signup.email,
        username=signup.username,
        password_hash=hash_password(signup.password, rounds=rounds),
        full_name=signup.full_name,
        role=signup.role,
        **values,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        conflict = _classify_conflict(db, signup.email, signup.username)
        logger.info("Signup rejected: %s", conflict.message)
        raise conflict from None
    db.refresh(user)
    logger.info("Created account id=%s role=%s", user.id, user.role)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the user for valid credentials. Unknown email and wrong password
    raise the same InvalidCredentialsError.
    """
    user = db.scalar(select(User).where(User.email == email.strip().lower()))
    if user is None:
        verify_password(password, _dummy_password_hash())
        logger.info("Login failed")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed")
        raise InvalidCredentialsError()
    return user


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)
