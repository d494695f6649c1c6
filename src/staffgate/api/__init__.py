"""API route aggregation.

All routers registered here get mounted in main.py. Both routers are
open; handlers that need a signed-in user declare
Depends(get_current_session) themselves.
"""

from fastapi import APIRouter

from staffgate.api.auth import router as auth_router
from staffgate.api.health import router as health_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
