"""Authentication module."""

from ghlogin.auth.dependencies import (
    get_current_user,
    get_optional_user,
    get_session_and_user,
    get_session_manager,
    set_session_cookie,
)
from ghlogin.auth.errors import GitHubProfileError, OAuth2RequestError
from ghlogin.auth.github import fetch_github_user
from ghlogin.auth.oauth import GitHub, build_github_client, get_github_client
from ghlogin.auth.sessions import SessionManager, build_session_manager
from ghlogin.auth.users import get_or_create_github_user

__all__ = [
    "GitHub",
    "GitHubProfileError",
    "OAuth2RequestError",
    "SessionManager",
    "build_github_client",
    "build_session_manager",
    "fetch_github_user",
    "get_current_user",
    "get_github_client",
    "get_optional_user",
    "get_or_create_github_user",
    "get_session_and_user",
    "get_session_manager",
    "set_session_cookie",
]
