"""FastAPI application for the Credibility Engine service."""

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..infrastructure.dependencies import get_service_container
from .endpoints import health, research

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    logger.info("🚀 Credibility Engine starting")

    yield  # Application runs here

    # Shutdown: Cleanup oracles and evidence provider
    await get_service_container().shutdown()
    logger.info("👋 Credibility Engine stopped")


# Create FastAPI application
app = FastAPI(
    title="Credibility Engine API",
    description="Claim credibility tracking with incremental conflict resolution",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(research.router)
