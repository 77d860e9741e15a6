"""Application service (use case) for reading posts and what hangs off them."""

from qa_moderation.application.interfaces import (
    CommentRepository,
    PostHistoryRepository,
    PostRepository,
)
from qa_moderation.domain.entities import Comment, Post, PostHistoryEntry
from qa_moderation.domain.exceptions import EntityNotFoundError


class PostService:
    """Read-only queries over posts, their history and their comments."""

    def __init__(
        self,
        posts: PostRepository,
        history: PostHistoryRepository,
        comments: CommentRepository,
    ):
        self._posts = posts
        self._history = history
        self._comments = comments

    async def get_post(self, post_id: int) -> Post:
        post = await self._posts.get_by_id(post_id)
        if post is None:
            raise EntityNotFoundError("Post", post_id)
        return post

    async def list_history(self, post_id: int) -> list[PostHistoryEntry]:
        await self.get_post(post_id)
        return await self._history.list_for_post(post_id)

    async def list_comments(self, post_id: int) -> list[Comment]:
        await self.get_post(post_id)
        return await self._comments.list_for_post(post_id)
