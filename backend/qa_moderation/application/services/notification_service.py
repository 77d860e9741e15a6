"""Application service (use case) for reading a user's notifications."""

from qa_moderation.application.interfaces import NotificationRepository
from qa_moderation.domain.entities import Notification


class NotificationService:
    def __init__(self, repository: NotificationRepository):
        self._repository = repository

    async def list_for_user(self, user_id: int, limit: int = 50) -> list[Notification]:
        return await self._repository.list_for_user(user_id, limit=limit)
