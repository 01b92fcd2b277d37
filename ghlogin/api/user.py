"""Signed-in user endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from ghlogin.auth import get_optional_user, get_session_and_user, get_session_manager
from ghlogin.auth.sessions import AuthSession, SessionManager, SessionUser

router = APIRouter()


@router.get("/")
async def home(
    user: Annotated[SessionUser | None, Depends(get_optional_user)],
) -> dict[str, Any]:
    """Return the signed-in user, or null."""
    return {"user": user.to_dict() if user else None}


@router.get("/api/user/sessions")
async def list_sessions(
    auth: Annotated[
        tuple[AuthSession | None, SessionUser | None], Depends(get_session_and_user)
    ],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> list[dict[str, Any]]:
    """List the active sessions of the current user.

    Session ids are bearer tokens and are never returned.
    """
    current, user = auth
    if current is None or user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return [
        {"expiresAt": s.expires_at.isoformat(), "current": s.id == current.id}
        for s in await sessions.get_user_sessions(user.id)
    ]
