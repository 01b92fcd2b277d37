"""Utility modules for the ghlogin application."""

from ghlogin.utils.logging import get_logger, LogContext, setup_logging
from ghlogin.utils.secrets import (
    generate_id_from_entropy_size,
    generate_state,
    mask_secret,
)

__all__ = [
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Secrets
    "generate_id_from_entropy_size",
    "generate_state",
    "mask_secret",
]
