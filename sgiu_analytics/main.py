"""
FastAPI application entry point for the SGIU analytics API.

Configures logging and CORS, registers the analytics router and exposes
health/root endpoints. The service has no database or other external
resources, so there is nothing to open or close at startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sgiu_analytics import __version__
from sgiu_analytics.api import api_router
from sgiu_analytics.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and shutdown along with the active training defaults."""
    logger.info(
        f"SGIU analytics API starting (iterations={settings.training_iterations}, "
        f"learning_rate={settings.learning_rate}, l2_penalty={settings.l2_penalty}, "
        f"min_training_rows={settings.min_training_rows})"
    )
    yield
    logger.info("SGIU analytics API shutting down")


# Create FastAPI application
app = FastAPI(
    title="SGIU Analytics API",
    version=__version__,
    description=(
        "Statistical modeling for the SGIU incident dashboard. "
        "Provides correlation, simple regression and logistic "
        "regression endpoints over caller-supplied data."
    ),
    lifespan=lifespan,
)

# The admin dashboard calls this service directly from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": "SGIU Analytics API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sgiu_analytics.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
