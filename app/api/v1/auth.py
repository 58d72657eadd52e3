"""Signup, login and logout with a JWT session cookie, plus the get_current_user dependency."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import AUTH_REQUIRED_DETAIL
from app.core.security import (
    clear_session_cookie,
    create_access_token,
    set_session_cookie,
    verify_session_token,
)
from app.models.user import User
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    UserOut,
    UserResponse,
)
from app.services.accounts import AccountError, authenticate, create_account, get_user
from app.services.signup import SignupValidationError, validate_signup

logger = logging.getLogger(__name__)

router = APIRouter()
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)
bearer = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=AUTH_REQUIRED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _start_session(response: Response, user: User) -> None:
    token = create_access_token(sub=user.id, email=user.email, role=user.role)
    set_session_cookie(response, token)


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: Annotated[dict[str, Any], Body()],
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """
    Create an account and start a session.

    The role decides which fields are required (see the role rulesets); the
    first validation error is returned as the 400 detail.
    """
    try:
        data = validate_signup(body)
    except SignupValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    try:
        user = create_account(db, data)
    except AccountError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    _start_session(response, user)
    return UserResponse(user=UserOut.model_validate(user))


@router.post("/login", response_model=UserResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """
    Authenticate with email and password and set the session cookie.
    Unknown email and wrong password give the same 400 response.
    """
    try:
        user = authenticate(db, body.email, body.password)
    except AccountError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    _start_session(response, user)
    return UserResponse(user=UserOut.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Tokens are not revoked server-side; they lapse at expiry."""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


def get_current_user(
    cookie_token: Annotated[str | None, Depends(session_cookie)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require a valid session (cookie, or Bearer header for API clients).
    The cookie is tried first; a stale cookie does not shadow a valid Bearer token.
    Every failure is the same 401 so callers learn nothing about why.
    """
    payload = verify_session_token(cookie_token)
    if payload is None and credentials is not None:
        payload = verify_session_token(credentials.credentials)
    if payload is None:
        raise _unauthorized()
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized()
    user = get_user(db, user_id)
    if user is None:
        logger.info("Session for unknown user id=%s rejected", user_id)
        raise _unauthorized()
    return CurrentUser.model_validate(user)


@router.get("/me", response_model=UserResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """Return the account behind the current session."""
    return UserResponse(user=UserOut.model_validate(current_user.model_dump()))
