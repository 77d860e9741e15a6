"""Audit recorder — single entry point for writing and listing audit records.

Records are append-only: this service never updates or deletes one.
"""

import logging

from qa_moderation.application.interfaces import AuditLogRepository
from qa_moderation.domain.entities import AuditLogType, AuditRecord, Post, SuggestedEdit, User

logger = logging.getLogger(__name__)

HIDDEN_LOG_TYPES = frozenset({AuditLogType.USER_ANNOTATION, AuditLogType.USER_HISTORY})
SORT_KEYS = ("age", "type", "event", "related", "user")


class AuditLogService:
    """Appends audit records by category and serves the admin audit listing.

    Usage:
        audit = AuditLogService(repository)
        await audit.moderator_audit(
            event_type="convert_to_comment",
            related=answer,
            user=moderator,
            comment="12, 13",
        )
    """

    def __init__(self, repository: AuditLogRepository):
        self._repo = repository

    async def admin_audit(self, *, event_type: str, user: User, related=None, comment: str = "") -> AuditRecord:
        return await self._append(AuditLogType.ADMIN_AUDIT, event_type, user, related, comment)

    async def moderator_audit(self, *, event_type: str, user: User, related=None, comment: str = "") -> AuditRecord:
        return await self._append(AuditLogType.MODERATOR_AUDIT, event_type, user, related, comment)

    async def rate_limit_log(self, *, event_type: str, user: User, related=None, comment: str = "") -> AuditRecord:
        return await self._append(AuditLogType.RATE_LIMIT_LOG, event_type, user, related, comment)

    async def list_records(self, sort: str = "age", page: int = 1, per_page: int = 100) -> list[AuditRecord]:
        """Audit listing for admins; annotation and user-history records are hidden."""
        if sort not in SORT_KEYS:
            sort = "age"
        page = max(page, 1)
        return await self._repo.list_records(
            exclude_types=HIDDEN_LOG_TYPES,
            sort=sort,
            skip=(page - 1) * per_page,
            limit=per_page,
        )

    async def _append(
        self,
        log_type: AuditLogType,
        event_type: str,
        user: User,
        related,
        comment: str,
    ) -> AuditRecord:
        related_type, related_id = _related_ref(related)
        record = AuditRecord(
            log_type=log_type,
            event_type=event_type,
            user_id=user.id,
            comment=comment,
            related_type=related_type,
            related_id=related_id,
        )
        saved = await self._repo.append(record)
        logger.info(
            "Audit %s/%s by user %s on %s %s",
            log_type.value,
            event_type,
            user.id,
            related_type,
            related_id,
        )
        return saved


def _related_ref(related) -> tuple[str | None, int | None]:
    if related is None:
        return None, None
    if isinstance(related, Post):
        return "Post", related.id
    if isinstance(related, SuggestedEdit):
        return "SuggestedEdit", related.id
    if isinstance(related, User):
        return "User", related.id
    raise TypeError(f"Unsupported audit target: {type(related).__name__}")
