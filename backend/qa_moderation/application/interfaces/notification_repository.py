"""Abstract repository interface (port) for notifications."""

from abc import ABC, abstractmethod

from qa_moderation.domain.entities import Notification


class NotificationRepository(ABC):

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        ...

    @abstractmethod
    async def list_for_user(self, user_id: int, limit: int = 50) -> list[Notification]:
        """Most recent notifications first."""
        ...
