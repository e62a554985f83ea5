from fastapi import APIRouter

from testgate.api.v1.endpoints import attempts, clubs, health, tests


api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(clubs.router)
api_router.include_router(tests.router)
api_router.include_router(attempts.router)
