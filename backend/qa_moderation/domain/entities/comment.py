"""Domain entity for comments attached to posts."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from qa_moderation.domain.exceptions import CommentValidationError

COMMENT_MAX_LENGTH = 500


@dataclass
class Comment:
    """A short remark on a post, authored by a user."""

    post_id: int
    user_id: int
    content: str
    id: int | None = None
    deleted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def validate(self, max_length: int = COMMENT_MAX_LENGTH) -> None:
        if not self.content or len(self.content) > max_length:
            raise CommentValidationError(
                f"Comment content must be between 1 and {max_length} characters."
            )
