"""Abstract repository interface (port) for the Post Store."""

from abc import ABC, abstractmethod
from datetime import datetime

from qa_moderation.domain.entities import Post, PostChanges, PostKind


class PostRepository(ABC):
    """Port for post persistence — holds the current accepted content of every post."""

    @abstractmethod
    async def get_by_id(self, post_id: int) -> Post | None:
        """Retrieve a single post by its ID, deleted or not."""
        ...

    @abstractmethod
    async def create(self, post: Post) -> Post:
        """Persist a new post and return it with the generated ID.

        Raises PostValidationError if the post breaks a validity rule.
        """
        ...

    @abstractmethod
    async def update(self, post_id: int, changes: PostChanges) -> Post:
        """Apply ``changes`` and return the updated post.

        Raises EntityNotFoundError for an unknown post, PostValidationError if the
        result would be invalid, PersistenceError if the write fails.
        """
        ...

    @abstractmethod
    async def count_recent_by_user(self, user_id: int, kind: PostKind, since: datetime) -> int:
        """Count posts of ``kind`` created by ``user_id`` at or after ``since``."""
        ...
