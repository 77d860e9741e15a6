"""Pydantic DTOs for posts and the records hanging off them."""

from datetime import datetime

from pydantic import BaseModel

from qa_moderation.domain.entities import Post, PostHistoryType


class PostResponse(BaseModel):
    """Schema returned to the client for a question or an answer."""

    id: int
    kind: str
    user_id: int
    parent_id: int | None
    category_id: int | None
    title: str | None
    tags: list[str]
    body: str
    body_markdown: str
    locked: bool
    deleted: bool
    deleted_at: datetime | None
    deleted_by_id: int | None
    last_activity_at: datetime
    last_activity_by_id: int | None
    last_edited_at: datetime | None
    last_edited_by_id: int | None
    created_at: datetime

    @classmethod
    def from_entity(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            kind=post.kind.value,
            user_id=post.user_id,
            parent_id=post.parent_id,
            category_id=post.category_id,
            title=post.title,
            tags=post.tags,
            body=post.body,
            body_markdown=post.body_markdown,
            locked=post.locked,
            deleted=post.deleted,
            deleted_at=post.deletion.deleted_at if post.deletion else None,
            deleted_by_id=post.deletion.deleted_by_id if post.deletion else None,
            last_activity_at=post.last_activity_at,
            last_activity_by_id=post.last_activity_by_id,
            last_edited_at=post.last_edited_at,
            last_edited_by_id=post.last_edited_by_id,
            created_at=post.created_at,
        )


class PostHistoryResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    history_type: PostHistoryType
    before: str | None
    after: str | None
    comment: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    content: str
    deleted: bool
    created_at: datetime

    model_config = {"from_attributes": True}
