"""HTTP routes."""

from fastapi import APIRouter

from kinship.api import families, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/user", tags=["user"])
router.include_router(families.router, tags=["families"])
