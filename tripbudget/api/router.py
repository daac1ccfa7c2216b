"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripbudget.api.routes import (
    trips, budget, spending, dashboard, settlements, explore
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(trips.router)
api_router.include_router(budget.router)
api_router.include_router(spending.router)
api_router.include_router(dashboard.router)
api_router.include_router(settlements.router)
api_router.include_router(explore.router)
