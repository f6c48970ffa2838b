"""Health check endpoint."""

from typing import Any

from fastapi import APIRouter, Request

from ..config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Return service health status and the loaded skill's stage counts."""
    configuration = request.app.state.skill.configuration
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
        "handlers": len(configuration.handlers),
        "verify_application_id": configuration.application_id is not None,
    }
