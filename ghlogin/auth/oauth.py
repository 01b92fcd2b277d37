"""GitHub OAuth2 client using Authlib."""

from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri

from ghlogin.auth.errors import OAuth2RequestError
from ghlogin.auth.models import OAuth2Tokens
from ghlogin.config import Settings, get_settings
from ghlogin.constants import (
    GITHUB_AUTHORIZE_URL,
    GITHUB_DEFAULT_SCOPES,
    GITHUB_TOKEN_URL,
    HTTPX_TIMEOUT,
)
from ghlogin.utils.logging import get_logger
from ghlogin.utils.secrets import mask_secret

logger = get_logger(__name__)


class GitHub:
    """OAuth2 authorization code flow against github.com.

    Credentials are not checked here; a bad client id or secret only shows
    up as an error when a code is exchanged.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    def _client(self) -> AsyncOAuth2Client:
        return AsyncOAuth2Client(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            token_endpoint_auth_method="client_secret_post",
            timeout=HTTPX_TIMEOUT,
        )

    def create_authorization_url(
        self, state: str, scopes: list[str] | None = None
    ) -> str:
        """Build the github.com authorize URL for the given state."""
        scope = " ".join(GITHUB_DEFAULT_SCOPES if scopes is None else scopes)
        return prepare_grant_uri(
            GITHUB_AUTHORIZE_URL,
            client_id=self.client_id,
            response_type="code",
            redirect_uri=self.redirect_uri,
            scope=scope,
            state=state,
        )

    async def validate_authorization_code(self, code: str) -> OAuth2Tokens:
        """Exchange an authorization code for an access token.

        Raises:
            OAuth2RequestError: GitHub rejected the code or returned no token.
            httpx.HTTPError: The token endpoint could not be reached.
        """
        async with self._client() as client:
            try:
                token = await client.fetch_token(GITHUB_TOKEN_URL, code=code)
            except OAuthError as e:
                raise OAuth2RequestError(e.error, e.description) from e

        access_token = token.get("access_token")
        if not access_token:
            raise OAuth2RequestError("invalid_token_response", "No access token received")

        return OAuth2Tokens(
            access_token=access_token,
            token_type=token.get("token_type") or "bearer",
            scope=token.get("scope") or "",
        )

    def __repr__(self) -> str:
        return f"<GitHub(client_id={mask_secret(self.client_id)})>"


def build_github_client(settings: Settings | None = None) -> GitHub:
    """Build a GitHub OAuth client from the current settings."""
    settings = settings or get_settings()
    github = GitHub(
        settings.github_client_id,
        settings.github_client_secret,
        redirect_uri=settings.github_callback_url,
    )
    logger.debug(f"Built GitHub OAuth client {github!r}")
    return github


def get_github_client() -> GitHub:
    """FastAPI dependency returning a GitHub client for this request."""
    return build_github_client()
