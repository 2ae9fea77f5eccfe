"""
Top-level router.

Mounts every domain router under its public prefix.  The paths are
what the mobile client calls, so they are not versioned.
"""

from fastapi import APIRouter

from .endpoints import purchases, restrooms, reviews, search, users

router = APIRouter()

router.include_router(reviews.router, prefix="/api/review", tags=["review"])
router.include_router(restrooms.router, prefix="/api/restroom", tags=["restroom"])
router.include_router(users.router, prefix="/api/users", tags=["users"])
router.include_router(purchases.router, prefix="/api/purchase", tags=["purchase"])
router.include_router(search.router, prefix="/address", tags=["search"])
