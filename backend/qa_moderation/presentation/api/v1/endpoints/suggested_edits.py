"""Suggested edit review endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from qa_moderation.application.schemas import EditDecision, SuggestedEditResponse
from qa_moderation.application.services import SuggestedEditService
from qa_moderation.domain.entities import User
from qa_moderation.domain.exceptions import EntityNotFoundError
from qa_moderation.infrastructure.dependencies import get_current_user, get_suggested_edit_service
from qa_moderation.presentation.api.v1.responses import action_response

router = APIRouter(prefix="/suggested-edits", tags=["Suggested Edits"])


@router.get("/{edit_id}", response_model=SuggestedEditResponse)
async def get_suggested_edit(
    edit_id: int,
    service: SuggestedEditService = Depends(get_suggested_edit_service),
) -> SuggestedEditResponse:
    try:
        edit = await service.get_edit(edit_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SuggestedEditResponse.from_entity(edit)


@router.post("/{edit_id}/approve")
async def approve_suggested_edit(
    edit_id: int,
    data: EditDecision | None = None,
    user: User = Depends(get_current_user),
    service: SuggestedEditService = Depends(get_suggested_edit_service),
) -> JSONResponse:
    """Apply the edit to its post."""
    comment = data.comment if data is not None else None
    return action_response(await service.approve(edit_id, user, comment))


@router.post("/{edit_id}/reject")
async def reject_suggested_edit(
    edit_id: int,
    data: EditDecision | None = None,
    user: User = Depends(get_current_user),
    service: SuggestedEditService = Depends(get_suggested_edit_service),
) -> JSONResponse:
    """Decline the edit; the post is left as it is."""
    comment = data.comment if data is not None else None
    return action_response(await service.reject(edit_id, user, comment))
