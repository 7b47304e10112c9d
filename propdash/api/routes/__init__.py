"""API routes package."""

from fastapi import APIRouter

from propdash.api.routes import dashboard, energy, health, properties

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(properties.router)
api_router.include_router(properties.tenants_router)
api_router.include_router(dashboard.router)
api_router.include_router(dashboard.transactions_router)
api_router.include_router(energy.router)
