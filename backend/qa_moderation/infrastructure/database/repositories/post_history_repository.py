"""SQLAlchemy implementation of the PostHistoryRepository."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import PostHistoryRepository
from qa_moderation.domain.entities import Post, PostHistoryEntry, PostHistoryType
from qa_moderation.domain.exceptions import PersistenceError
from qa_moderation.infrastructure.database.models import PostHistoryModel
from qa_moderation.infrastructure.database.repositories._mapping import as_utc


class SQLAlchemyPostHistoryRepository(PostHistoryRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def record_edit(
        self,
        post: Post,
        user_id: int,
        *,
        before: str | None,
        after: str | None,
        comment: str | None = None,
    ) -> PostHistoryEntry:
        return await self._record(
            PostHistoryEntry(
                post_id=post.id,
                user_id=user_id,
                history_type=PostHistoryType.POST_EDITED,
                before=before,
                after=after,
                comment=comment,
            )
        )

    async def record_delete(self, post: Post, user_id: int) -> PostHistoryEntry:
        return await self._record(
            PostHistoryEntry(post_id=post.id, user_id=user_id, history_type=PostHistoryType.POST_DELETED)
        )

    async def record_undelete(self, post: Post, user_id: int) -> PostHistoryEntry:
        return await self._record(
            PostHistoryEntry(post_id=post.id, user_id=user_id, history_type=PostHistoryType.POST_UNDELETED)
        )

    async def list_for_post(self, post_id: int) -> list[PostHistoryEntry]:
        result = await self._session.execute(
            select(PostHistoryModel)
            .where(PostHistoryModel.post_id == post_id)
            .order_by(PostHistoryModel.created_at.asc(), PostHistoryModel.id.asc())
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def _record(self, entry: PostHistoryEntry) -> PostHistoryEntry:
        model = PostHistoryModel(
            post_id=entry.post_id,
            user_id=entry.user_id,
            history_type=entry.history_type.value,
            before_state=entry.before,
            after_state=entry.after,
            comment=entry.comment,
            created_at=entry.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"record {entry.history_type.value}", str(exc)) from exc
        entry.id = model.id
        return entry

    @staticmethod
    def _to_domain(model: PostHistoryModel) -> PostHistoryEntry:
        return PostHistoryEntry(
            id=model.id,
            post_id=model.post_id,
            user_id=model.user_id,
            history_type=PostHistoryType(model.history_type),
            before=model.before_state,
            after=model.after_state,
            comment=model.comment,
            created_at=as_utc(model.created_at),
        )
