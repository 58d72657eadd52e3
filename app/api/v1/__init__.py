"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, dashboard, health, properties, risk

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(properties.router, prefix="/properties", tags=["properties"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(risk.router, prefix="/risk", tags=["risk"])
