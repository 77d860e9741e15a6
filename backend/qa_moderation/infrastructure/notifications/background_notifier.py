"""Background notifier — fire-and-forget delivery of user notifications."""

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import Notifier
from qa_moderation.domain.entities import Notification
from qa_moderation.infrastructure.database.repositories import SQLAlchemyNotificationRepository

logger = logging.getLogger(__name__)


class BackgroundNotifier(Notifier):
    """Persists each notification from a detached asyncio task with its own session.

    The caller never observes the outcome: a failed delivery is logged and
    dropped, and never rolls back the request that triggered it. Pending
    deliveries are awaited on shutdown.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self._tasks: set[asyncio.Task] = set()

    def notify(self, user_id: int, message: str, link: str) -> None:
        notification = Notification(user_id=user_id, content=message, link=link)
        task = asyncio.create_task(self._deliver(notification))
        # The event loop only keeps weak references to tasks.
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(self, notification: Notification) -> None:
        try:
            async with self._session_factory() as session:
                repo = SQLAlchemyNotificationRepository(session)
                await repo.create(notification)
                await session.commit()
            logger.debug("Notification delivered to user %s", notification.user_id)
        except Exception:
            logger.exception("Failed to deliver notification to user %s", notification.user_id)

    async def shutdown(self) -> None:
        """Wait for in-flight deliveries to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    @property
    def pending_count(self) -> int:
        return len(self._tasks)
