from fastapi import APIRouter
from app.routers import (
    health,
    campaigns,
)

def build_api_router(prefix: str) -> APIRouter:
    api_router = APIRouter(prefix=prefix)

    api_router.include_router(health.router, tags=["health"])
    api_router.include_router(campaigns.router, prefix="/campaigns", tags=["campaigns"])
    return api_router
