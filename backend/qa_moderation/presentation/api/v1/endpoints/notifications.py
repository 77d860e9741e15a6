"""Notification endpoints for the current user."""

from fastapi import APIRouter, Depends, Query

from qa_moderation.application.schemas import NotificationResponse
from qa_moderation.application.services import NotificationService
from qa_moderation.domain.entities import User
from qa_moderation.infrastructure.dependencies import get_current_user, get_notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    limit: int = Query(50, ge=1, le=200),
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
) -> list[NotificationResponse]:
    """Latest notifications first."""
    notifications = await service.list_for_user(user.id, limit=limit)
    return [NotificationResponse.model_validate(n, from_attributes=True) for n in notifications]
