"""GitHub login, callback and logout endpoints."""

from typing import Annotated

import httpx
from fastapi import APIRouter, Cookie, Depends, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ghlogin.auth import (
    GitHub,
    OAuth2RequestError,
    SessionManager,
    fetch_github_user,
    get_github_client,
    get_or_create_github_user,
    get_session_and_user,
    get_session_manager,
    set_session_cookie,
)
from ghlogin.auth.sessions import AuthSession, SessionUser
from ghlogin.config import Settings, get_settings
from ghlogin.constants import OAUTH_STATE_COOKIE_NAME, OAUTH_STATE_MAX_AGE
from ghlogin.db import get_db
from ghlogin.utils.http_client import get_http_client
from ghlogin.utils.logging import LogContext, get_logger
from ghlogin.utils.secrets import generate_state

router = APIRouter()
logger = get_logger(__name__)


@router.get("/login/github")
async def github_login(
    github: Annotated[GitHub, Depends(get_github_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RedirectResponse:
    """Initiate GitHub OAuth login."""
    state = generate_state()
    response = RedirectResponse(url=github.create_authorization_url(state), status_code=302)
    response.set_cookie(
        OAUTH_STATE_COOKIE_NAME,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/login/github/callback")
async def github_callback(
    db: Annotated[AsyncSession, Depends(get_db)],
    github: Annotated[GitHub, Depends(get_github_client)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    code: str | None = None,
    state: str | None = None,
    github_oauth_state: Annotated[str | None, Cookie()] = None,
) -> Response:
    """Handle the GitHub OAuth callback.

    Responds 400 for a missing or forged state and for codes GitHub rejects,
    500 for any other failure, and otherwise signs the user in and redirects
    to the home page. Error responses have no body.
    """
    log = LogContext(logger, provider="github")

    if not code or not state or not github_oauth_state or state != github_oauth_state:
        log.warning("Rejected callback: missing code or state mismatch")
        return Response(status_code=400)

    try:
        tokens = await github.validate_authorization_code(code)
        github_user = await fetch_github_user(http_client, tokens.access_token)
        user = await get_or_create_github_user(db, github_user)
        session = await sessions.create_session(user.id, {})
        await db.commit()
    except OAuth2RequestError as e:
        log.warning(f"Invalid authorization code: {e}")
        return Response(status_code=400)
    except Exception:
        log.exception("GitHub login failed")
        await db.rollback()
        return Response(status_code=500)

    log.bind(user=user.id).info("Signed in")
    response = RedirectResponse(url="/", status_code=302)
    set_session_cookie(response, sessions.create_session_cookie(session.id))
    return response


@router.post("/logout")
async def logout(
    db: Annotated[AsyncSession, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    auth: Annotated[
        tuple[AuthSession | None, SessionUser | None], Depends(get_session_and_user)
    ],
) -> Response:
    """Log out the current session."""
    session, _ = auth
    if session is None:
        return Response(status_code=401)

    await sessions.invalidate_session(session.id)
    await db.commit()

    response = RedirectResponse(url="/login/github", status_code=302)
    set_session_cookie(response, sessions.create_blank_session_cookie())
    return response
