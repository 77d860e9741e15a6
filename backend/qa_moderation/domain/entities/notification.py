"""Domain entity for user notifications."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Notification:
    user_id: int
    content: str
    link: str
    id: int | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
