"""Health check endpoint. Reports configuration only, never touches the database."""

from fastapi import APIRouter

from qa_moderation.config import get_settings
from qa_moderation.infrastructure.database.session import engine

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the service status, version and active database backend."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.app_title,
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": engine.dialect.name,
    }
