"""
API routes initialization
"""

from fastapi import APIRouter

from excel_assistant.api.v1 import health, assistant

# Create main API router
router = APIRouter()

# Include v1 routes
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(assistant.router, prefix="/assistant", tags=["assistant"])
