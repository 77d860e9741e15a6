"""Pydantic DTOs for the audit log listing."""

from datetime import datetime

from pydantic import BaseModel

from qa_moderation.domain.entities import AuditLogType


class AuditRecordResponse(BaseModel):
    id: int
    log_type: AuditLogType
    event_type: str
    user_id: int | None
    comment: str
    related_type: str | None
    related_id: int | None
    created_at: datetime

    model_config = {"from_attributes": True}
