"""Errors raised while completing an OAuth login."""


class OAuth2RequestError(Exception):
    """The provider rejected an OAuth2 request, e.g. an invalid or reused code."""

    def __init__(self, error: str, description: str | None = None) -> None:
        self.error = error
        self.description = description
        super().__init__(f"{error}: {description}" if description else error)


class GitHubProfileError(Exception):
    """The GitHub user profile could not be fetched or parsed."""
