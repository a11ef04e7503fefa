"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter

from ...infrastructure.dependencies import get_service_container

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Check the health of the service and its oracles.

    Returns:
        Service status and oracle availability
    """
    container = get_service_container()
    oracles = {
        name.title(): is_active
        for name, is_active in container.oracle_factory.available_oracles.items()
    }

    return {
        "status": "healthy",
        "version": "0.1.0",
        "oracles": oracles,
    }
