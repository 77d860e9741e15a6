"""Abstract repository interface (port) for comments."""

from abc import ABC, abstractmethod

from qa_moderation.domain.entities import Comment


class CommentRepository(ABC):

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        ...

    @abstractmethod
    async def list_for_post(self, post_id: int) -> list[Comment]:
        """Non-deleted comments on a post, oldest first."""
        ...
