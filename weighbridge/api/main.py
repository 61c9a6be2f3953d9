from fastapi import APIRouter

from weighbridge.api.routes import health, settlements, weighing

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(weighing.router)
api_router.include_router(settlements.router)
