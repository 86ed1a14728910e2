"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Unlike a blanket auth dependency on whole routers, auth here is
per-route: the listings router mixes public reads with owner-only
writes, so each protected handler asks for get_current_user itself.
"""

from fastapi import APIRouter

from homelist.api.auth import router as auth_router
from homelist.api.health import router as health_router
from homelist.api.listings import router as listings_router
from homelist.api.users import router as users_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(listings_router, tags=["listings"])
api_router.include_router(users_router, tags=["users"])
