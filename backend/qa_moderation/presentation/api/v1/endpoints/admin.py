"""Admin endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from qa_moderation.application.schemas import AuditRecordResponse
from qa_moderation.application.services import AuditLogService
from qa_moderation.domain.entities import User
from qa_moderation.infrastructure.dependencies import get_audit_log_service, get_current_user

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/audit-log", response_model=list[AuditRecordResponse])
async def list_audit_log(
    sort: str = "age",
    page: int = Query(1, ge=1),
    user: User = Depends(get_current_user),
    service: AuditLogService = Depends(get_audit_log_service),
) -> list[AuditRecordResponse]:
    """Admin and moderator audit trail, 100 records per page."""
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admins only")
    records = await service.list_records(sort=sort, page=page)
    return [AuditRecordResponse.model_validate(r, from_attributes=True) for r in records]
