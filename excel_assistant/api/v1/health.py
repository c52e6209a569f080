"""
Health check endpoints
"""
from fastapi import APIRouter
from datetime import datetime, timezone

from excel_assistant import __version__
from excel_assistant.core.config import settings

router = APIRouter()


def health_payload() -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "excel-assistant",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "components": {
            "anthropic": "configured" if settings.ANTHROPIC_API_KEY else "per-request key",
        },
    }


@router.get("/status")
async def health_status():
    """Basic health check"""
    return health_payload()
