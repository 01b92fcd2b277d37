"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ghlogin.auth.sessions import (
    AuthSession,
    SessionCookie,
    SessionManager,
    SessionUser,
    build_session_manager,
)
from ghlogin.db import get_db


def set_session_cookie(response: Response, cookie: SessionCookie) -> None:
    """Set a cookie exactly as the session manager describes it."""
    response.set_cookie(cookie.name, cookie.value, **cookie.attributes)


async def get_session_manager(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionManager:
    """Session manager bound to this request's database session."""
    return build_session_manager(db)


async def get_session_and_user(
    request: Request,
    response: Response,
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> tuple[AuthSession | None, SessionUser | None]:
    """Validate the session cookie, refreshing or clearing it as needed."""
    session_id = sessions.read_session_cookie(request.cookies)
    if not session_id:
        return None, None

    session, user = await sessions.validate_session(session_id)
    if session is None:
        set_session_cookie(response, sessions.create_blank_session_cookie())
        return None, None

    if session.fresh:
        set_session_cookie(response, sessions.create_session_cookie(session.id))
    return session, user


async def get_optional_user(
    auth: Annotated[
        tuple[AuthSession | None, SessionUser | None], Depends(get_session_and_user)
    ],
) -> SessionUser | None:
    """Get current user from session if logged in."""
    return auth[1]


async def get_current_user(
    user: Annotated[SessionUser | None, Depends(get_optional_user)],
) -> SessionUser:
    """Get current user, raising 401 if not authenticated."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
