"""
API package initialization.

This package contains FastAPI router modules for the SGIU analytics backend:
- analytics: Correlation, regression and logistic model endpoints
"""

from fastapi import APIRouter

from sgiu_analytics.api.analytics import router as analytics_router

# Create main API router
api_router = APIRouter()
api_router.include_router(analytics_router)  # analytics router has its own prefix

__all__ = [
    "api_router",
    "analytics_router",
]
