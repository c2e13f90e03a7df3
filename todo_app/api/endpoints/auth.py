"""
Auth endpoints - register, local login, Google OAuth, logout, current user.
Every successful login path rotates the session and sets the HttpOnly cookie.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from todo_app.config import get_settings
from todo_app.core.dependencies import CurrentUser, SessionStoreDep, get_session_token
from todo_app.core.security import create_oauth_state, verify_oauth_state
from todo_app.core.sessions import SessionStore
from todo_app.db.models.user import User
from todo_app.db.repositories.user_repository import UserRepository
from todo_app.db.session import DbSession
from todo_app.schemas.user import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
)
from todo_app.services.auth_service import (
    AuthService,
    EmailAlreadyRegistered,
    FederatedLoginError,
    InvalidCredentials,
)
from todo_app.services.google_oauth import GoogleOAuthClient, OAuthError, get_google_oauth_client

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()

GoogleOAuth = Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)]


def _get_auth_service(session: DbSession) -> AuthService:
    return AuthService(UserRepository(session))


def _envelope(user: User) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.model_validate(user))


async def _start_session(
    request: Request, response: Response, store: SessionStore, user: User
) -> None:
    """Drop any session the request carried, then bind a fresh one to user."""
    previous = get_session_token(request)
    if previous:
        await store.destroy(previous)
    token = await store.create(user.id)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=store.ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


@router.get("/google")
async def google_login(oauth: GoogleOAuth):
    """Redirect the browser to Google's consent screen."""
    if not oauth.configured:
        logger.warning("Google login requested but GOOGLE_CLIENT_ID/SECRET are not set")
        return RedirectResponse(settings.client_origin)
    return RedirectResponse(oauth.authorization_url(create_oauth_state()))


@router.get("/google/callback")
async def google_callback(
    request: Request,
    session: DbSession,
    store: SessionStoreDep,
    oauth: GoogleOAuth,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """Finish the OAuth dance. Success and failure both land on the client app."""
    failure = RedirectResponse(settings.client_origin)
    if error:
        logger.warning("Google callback returned error=%s", error)
        return failure
    if not code or not verify_oauth_state(state):
        logger.warning("Google callback rejected: missing code or bad state")
        return failure
    try:
        profile = await oauth.fetch_profile(code)
    except OAuthError as e:
        logger.warning("Google token exchange failed: %s", e)
        return failure
    try:
        user = await _get_auth_service(session).login_federated(profile)
    except FederatedLoginError as e:
        logger.warning("Google login refused: %s", e)
        return failure

    response = RedirectResponse(settings.client_origin)
    await _start_session(request, response, store, user)
    return response


@router.post("/register", response_model=UserEnvelope)
async def register(
    request: Request,
    response: Response,
    session: DbSession,
    store: SessionStoreDep,
    data: RegisterRequest,
):
    """Create a password account and log it in."""
    try:
        user = await _get_auth_service(session).register(data)
    except EmailAlreadyRegistered:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    await _start_session(request, response, store, user)
    return _envelope(user)


@router.post("/login", response_model=UserEnvelope)
async def login(
    request: Request,
    response: Response,
    session: DbSession,
    store: SessionStoreDep,
    data: LoginRequest,
):
    """Email/password login."""
    try:
        user = await _get_auth_service(session).login_local(data.email, data.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    await _start_session(request, response, store, user)
    return _envelope(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response, store: SessionStoreDep):
    """End the current session. Succeeds even when there is none."""
    token = get_session_token(request)
    if token:
        try:
            await store.destroy(token)
        except Exception as e:
            logger.exception("Session store failed during logout")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Logout failed",
            ) from e
    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserEnvelope)
async def current_user(user: CurrentUser):
    """The logged-in user, or 401."""
    return _envelope(user)
