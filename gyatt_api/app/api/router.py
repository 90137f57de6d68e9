"""
Top-level API router.

Aggregates the domain routers under a unified router which the
application mounts at ``/api``.  When a new domain is introduced,
include its router here.
"""

from fastapi import APIRouter

from .endpoints import auth, health, missions, profile, suggestions, users

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/user", tags=["users"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(missions.router, prefix="/missions", tags=["missions"])
router.include_router(suggestions.router, prefix="/suggestions", tags=["suggestions"])
router.include_router(health.router, tags=["health"])
