"""Main router."""

from fastapi import APIRouter

from ghlogin.api.auth import router as auth_router
from ghlogin.api.user import router as user_router

api_router = APIRouter()

api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(user_router, tags=["user"])
