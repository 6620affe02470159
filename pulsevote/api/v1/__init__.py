"""API v1 routes."""

from fastapi import APIRouter

from pulsevote.api.v1 import auth, health, polls

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(polls.router, prefix="/polls", tags=["polls"])
