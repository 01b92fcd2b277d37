"""Shared persistent httpx client for GitHub API calls.

A persistent client reuses connections instead of paying a TCP + TLS
handshake on every login.
"""

import httpx

from ghlogin.constants import HTTPX_TIMEOUT

# Connection pool limits
_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)

_github_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Get persistent httpx client for GitHub API calls."""
    global _github_client
    if _github_client is None:
        _github_client = httpx.AsyncClient(
            timeout=HTTPX_TIMEOUT,
            limits=_POOL_LIMITS,
        )
    return _github_client


async def close_all_clients() -> None:
    """Close persistent httpx clients. Call during app shutdown."""
    global _github_client
    if _github_client is not None:
        await _github_client.aclose()
        _github_client = None
