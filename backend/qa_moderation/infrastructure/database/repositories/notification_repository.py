"""SQLAlchemy implementation of the NotificationRepository."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import NotificationRepository
from qa_moderation.domain.entities import Notification
from qa_moderation.domain.exceptions import PersistenceError
from qa_moderation.infrastructure.database.models import NotificationModel
from qa_moderation.infrastructure.database.repositories._mapping import as_utc


class SQLAlchemyNotificationRepository(NotificationRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            content=notification.content,
            link=notification.link,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("create notification", str(exc)) from exc
        notification.id = model.id
        return notification

    async def list_for_user(self, user_id: int, limit: int = 50) -> list[Notification]:
        result = await self._session.execute(
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        return [
            Notification(
                id=m.id,
                user_id=m.user_id,
                content=m.content,
                link=m.link,
                is_read=m.is_read,
                created_at=as_utc(m.created_at),
            )
            for m in result.scalars().all()
        ]
