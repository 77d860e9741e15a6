"""SQLAlchemy implementation of the CommentRepository."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import CommentRepository
from qa_moderation.domain.entities import Comment
from qa_moderation.domain.exceptions import PersistenceError
from qa_moderation.infrastructure.database.models import CommentModel
from qa_moderation.infrastructure.database.repositories._mapping import as_utc


class SQLAlchemyCommentRepository(CommentRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            post_id=comment.post_id,
            user_id=comment.user_id,
            content=comment.content,
            deleted=comment.deleted,
            created_at=comment.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("create comment", str(exc)) from exc
        comment.id = model.id
        return comment

    async def list_for_post(self, post_id: int) -> list[Comment]:
        result = await self._session.execute(
            select(CommentModel)
            .where(CommentModel.post_id == post_id, CommentModel.deleted.is_(False))
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        return [
            Comment(
                id=m.id,
                post_id=m.post_id,
                user_id=m.user_id,
                content=m.content,
                deleted=m.deleted,
                created_at=as_utc(m.created_at),
            )
            for m in result.scalars().all()
        ]
