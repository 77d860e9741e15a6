"""Abstract repository interface (port) for the post history log."""

from abc import ABC, abstractmethod

from qa_moderation.domain.entities import Post, PostHistoryEntry


class PostHistoryRepository(ABC):
    """Port for post history — durable once a record call returns."""

    @abstractmethod
    async def record_edit(
        self,
        post: Post,
        user_id: int,
        *,
        before: str | None,
        after: str | None,
        comment: str | None = None,
    ) -> PostHistoryEntry:
        ...

    @abstractmethod
    async def record_delete(self, post: Post, user_id: int) -> PostHistoryEntry:
        ...

    @abstractmethod
    async def record_undelete(self, post: Post, user_id: int) -> PostHistoryEntry:
        ...

    @abstractmethod
    async def list_for_post(self, post_id: int) -> list[PostHistoryEntry]:
        """History of a post, oldest first."""
        ...
