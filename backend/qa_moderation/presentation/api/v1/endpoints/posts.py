"""Post read endpoints and edit suggestions on posts."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from qa_moderation.application.schemas import (
    CommentResponse,
    PostHistoryResponse,
    PostResponse,
    SuggestedEditCreate,
    SuggestedEditResponse,
)
from qa_moderation.application.services import PostService, SuggestedEditService
from qa_moderation.domain.entities import ProposedFields, User
from qa_moderation.domain.exceptions import EntityNotFoundError
from qa_moderation.infrastructure.dependencies import (
    get_current_user,
    get_post_service,
    get_suggested_edit_service,
)
from qa_moderation.presentation.api.v1.responses import action_response

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Retrieve a single question or answer."""
    try:
        post = await service.get_post(post_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PostResponse.from_entity(post)


@router.get("/{post_id}/history", response_model=list[PostHistoryResponse])
async def get_post_history(
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> list[PostHistoryResponse]:
    """Edit, delete and undelete events of a post, oldest first."""
    try:
        entries = await service.list_history(post_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [PostHistoryResponse.model_validate(e, from_attributes=True) for e in entries]


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def get_post_comments(
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    try:
        comments = await service.list_comments(post_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [CommentResponse.model_validate(c, from_attributes=True) for c in comments]


@router.get("/{post_id}/suggested-edits", response_model=list[SuggestedEditResponse])
async def list_suggested_edits(
    post_id: int,
    active_only: bool = False,
    service: SuggestedEditService = Depends(get_suggested_edit_service),
) -> list[SuggestedEditResponse]:
    """Suggested edits on a post, optionally only those still awaiting review."""
    try:
        edits = await service.list_for_post(post_id, active_only=active_only)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [SuggestedEditResponse.from_entity(e) for e in edits]


@router.post("/{post_id}/suggested-edits")
async def propose_edit(
    post_id: int,
    data: SuggestedEditCreate,
    user: User = Depends(get_current_user),
    service: SuggestedEditService = Depends(get_suggested_edit_service),
) -> JSONResponse:
    """Suggest changes to a post for review."""
    fields = ProposedFields(title=data.title, tags=data.tags, body_markdown=data.body_markdown)
    result = await service.propose_edit(post_id, user, fields, comment=data.comment)
    return action_response(result)
