"""API routes."""

from ghlogin.api.router import api_router

__all__ = ["api_router"]
