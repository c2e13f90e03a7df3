"""
FastAPI dependencies - DB session, session store, current user.
Resolves the session cookie to a user on every request that asks for one
and gates protected routes with a 401.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from todo_app.config import get_settings
from todo_app.core.sessions import SessionStore, get_session_store
from todo_app.db.models.user import User
from todo_app.db.repositories.user_repository import UserRepository
from todo_app.db.session import DbSession

settings = get_settings()

SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_session_token(request: Request) -> str | None:
    """Raw session token from the cookie, if any."""
    return request.cookies.get(settings.session_cookie_name) or None


async def get_optional_user(
    request: Request,
    session: DbSession,
    store: SessionStoreDep,
) -> User | None:
    """Resolve cookie -> session -> user. None (not an error) when there is no valid session."""
    user = None
    token = get_session_token(request)
    if token:
        user_id = await store.get(token)
        if user_id is not None:
            user = await UserRepository(session).get_by_id(user_id)
    request.state.user = user
    return user


OptionalUser = Annotated[User | None, Depends(get_optional_user)]


async def get_current_user(user: OptionalUser) -> User:
    """Require an authenticated session. Raises 401 otherwise."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
