"""Random identifiers and secret helpers.

Identifiers are lowercase base32 without padding, so every 5 bytes of
entropy become 8 characters.
"""

import base64
import secrets

from ghlogin.constants import OAUTH_STATE_ENTROPY_BYTES


def generate_id_from_entropy_size(size: int) -> str:
    """Generate a random lowercase base32 identifier.

    Args:
        size: Number of random bytes. Should be a multiple of 5 to avoid
            padding, e.g. 10 bytes gives a 16 character id.

    Returns:
        The encoded identifier
    """
    if size < 1:
        raise ValueError("size must be positive")
    encoded = base64.b32encode(secrets.token_bytes(size)).decode("ascii")
    return encoded.rstrip("=").lower()


def generate_state(size: int = OAUTH_STATE_ENTROPY_BYTES) -> str:
    """Generate an unpredictable OAuth anti-forgery state value."""
    return secrets.token_urlsafe(size)


def mask_secret(secret: str, visible_chars: int = 4) -> str:
    """Mask a secret for safe logging.

    Args:
        secret: The secret to mask
        visible_chars: Number of characters to show at the end

    Returns:
        Masked secret like "****abcd"
    """
    if not secret:
        return "<empty>"
    if len(secret) <= visible_chars:
        return "*" * len(secret)
    return "*" * (len(secret) - visible_chars) + secret[-visible_chars:]
