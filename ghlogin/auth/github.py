"""GitHub REST API calls made during login."""

import httpx
from pydantic import ValidationError

from ghlogin.auth.errors import GitHubProfileError
from ghlogin.auth.models import GitHubUser
from ghlogin.constants import GITHUB_USER_AGENT, GITHUB_USER_URL


async def fetch_github_user(client: httpx.AsyncClient, access_token: str) -> GitHubUser:
    """Fetch the profile of the user owning `access_token`.

    Raises:
        GitHubProfileError: On network errors, non-2xx responses or a body
            that is not a GitHub user.
    """
    try:
        response = await client.get(
            GITHUB_USER_URL,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
                "User-Agent": GITHUB_USER_AGENT,
            },
        )
        response.raise_for_status()
        return GitHubUser.model_validate(response.json())
    except httpx.HTTPStatusError as e:
        raise GitHubProfileError(
            f"GitHub user request failed with status {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise GitHubProfileError(f"GitHub user request failed: {e}") from e
    except (ValueError, ValidationError) as e:
        raise GitHubProfileError(f"Invalid GitHub user response: {e}") from e
