"""Domain entity for post history — content transitions applied to a post."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class PostHistoryType(str, Enum):
    POST_EDITED = "post_edited"
    POST_DELETED = "post_deleted"
    POST_UNDELETED = "post_undeleted"


@dataclass
class PostHistoryEntry:
    """Before/after snapshot of a post change and who made it."""

    post_id: int
    user_id: int
    history_type: PostHistoryType
    before: str | None = None
    after: str | None = None
    comment: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
