"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from qa_moderation.presentation.api.v1.endpoints.health import router as health_router
from qa_moderation.presentation.api.v1.endpoints.posts import router as posts_router
from qa_moderation.presentation.api.v1.endpoints.suggested_edits import router as suggested_edits_router
from qa_moderation.presentation.api.v1.endpoints.answers import router as answers_router
from qa_moderation.presentation.api.v1.endpoints.admin import router as admin_router
from qa_moderation.presentation.api.v1.endpoints.notifications import router as notifications_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(posts_router)
router.include_router(suggested_edits_router)
router.include_router(answers_router)
router.include_router(admin_router)
router.include_router(notifications_router)
