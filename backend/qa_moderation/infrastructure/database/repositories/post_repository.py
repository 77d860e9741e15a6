"""Concrete Post Store backed by SQLAlchemy."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import PostRepository
from qa_moderation.domain.entities import Post, PostChanges, PostDeletion, PostKind
from qa_moderation.domain.exceptions import EntityNotFoundError, PersistenceError
from qa_moderation.infrastructure.database.models import PostModel
from qa_moderation.infrastructure.database.repositories._mapping import as_utc


class SQLAlchemyPostRepository(PostRepository):
    """Implements the PostRepository port. Every write is validated against the post rules."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, post_id: int) -> Post | None:
        model = await self._session.get(PostModel, post_id)
        return self._to_entity(model) if model else None

    async def create(self, post: Post) -> Post:
        post.validate()
        model = PostModel(
            post_type=post.kind.value,
            user_id=post.user_id,
            parent_id=post.parent_id,
            category_id=post.category_id,
            created_at=post.created_at,
        )
        self._apply(model, post)
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("create post", str(exc)) from exc
        return self._to_entity(model)

    async def update(self, post_id: int, changes: PostChanges) -> Post:
        model = await self._session.get(PostModel, post_id)
        if model is None:
            raise EntityNotFoundError("Post", post_id)
        updated = self._to_entity(model).with_changes(changes)
        # State-only changes must not be blocked by content written under older rules
        if changes.touches_content():
            updated.validate()
        self._apply(model, updated)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("update post", str(exc)) from exc
        return self._to_entity(model)

    async def count_recent_by_user(self, user_id: int, kind: PostKind, since: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(PostModel)
            .where(
                PostModel.user_id == user_id,
                PostModel.post_type == kind.value,
                PostModel.created_at >= since,
            )
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _apply(model: PostModel, post: Post) -> None:
        """Copy mutable post state onto the ORM row."""
        model.title = post.title
        model.tags = list(post.tags)
        model.body = post.body
        model.body_markdown = post.body_markdown
        model.locked = post.locked
        model.deleted = post.deletion is not None
        model.deleted_at = post.deletion.deleted_at if post.deletion else None
        model.deleted_by_id = post.deletion.deleted_by_id if post.deletion else None
        model.last_activity_at = post.last_activity_at
        model.last_activity_by_id = post.last_activity_by_id
        model.last_edited_at = post.last_edited_at
        model.last_edited_by_id = post.last_edited_by_id

    @staticmethod
    def _to_entity(model: PostModel) -> Post:
        deletion = None
        if model.deleted:
            deletion = PostDeletion(
                deleted_by_id=model.deleted_by_id,
                deleted_at=as_utc(model.deleted_at),
            )
        return Post(
            id=model.id,
            kind=PostKind(model.post_type),
            user_id=model.user_id,
            parent_id=model.parent_id,
            category_id=model.category_id,
            title=model.title,
            tags=list(model.tags or []),
            body=model.body,
            body_markdown=model.body_markdown,
            locked=model.locked,
            deletion=deletion,
            last_activity_at=as_utc(model.last_activity_at),
            last_activity_by_id=model.last_activity_by_id,
            last_edited_at=as_utc(model.last_edited_at),
            last_edited_by_id=model.last_edited_by_id,
            created_at=as_utc(model.created_at),
        )
