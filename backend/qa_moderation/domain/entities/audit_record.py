"""Domain entity for audit records — append-only facts about moderation and admin actions."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class AuditLogType(str, Enum):
    """Audit record categories."""

    ADMIN_AUDIT = "admin_audit"
    MODERATOR_AUDIT = "moderator_audit"
    RATE_LIMIT_LOG = "rate_limit_log"
    USER_ANNOTATION = "user_annotation"
    USER_HISTORY = "user_history"


@dataclass(frozen=True)
class AuditRecord:
    """An immutable audit fact. ``related_type``/``related_id`` point at the affected entity."""

    log_type: AuditLogType
    event_type: str
    user_id: int | None
    comment: str = ""
    related_type: str | None = None
    related_id: int | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
