"""
Health check router.

Liveness plus a readiness view of the optional integrations.
"""

from fastapi import APIRouter, Depends

from api.deps import get_catalog
from backend.settings import Settings, get_settings

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/ready")
def ready(settings: Settings = Depends(get_settings)):
    """Readiness: catalog loads, and which remote integrations are configured."""
    return {
        "status": "ok",
        "exercises": len(get_catalog()),
        "remote_sync": settings.supabase_configured,
        "ai_coaching": bool(settings.openai_api_key),
    }
