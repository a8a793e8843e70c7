"""API route aggregation.

All routers registered here get mounted in main.py. Record routes and
/accounts/me read the bearer token through the get_claims dependency
inside each handler, so login and registration stay open.
"""

from fastapi import APIRouter

from dietracker.api.accounts import router as accounts_router
from dietracker.api.health import router as health_router
from dietracker.api.records import router as records_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(accounts_router, tags=["accounts"])
api_router.include_router(records_router, tags=["records"])
