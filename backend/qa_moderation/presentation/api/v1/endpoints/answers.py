"""Answer endpoints — posting, editing and curation."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from qa_moderation.application.schemas import AnswerCreate, AnswerUpdate, ConvertToCommentRequest
from qa_moderation.application.services import AnswerService
from qa_moderation.domain.entities import User
from qa_moderation.infrastructure.dependencies import get_answer_service, get_current_user
from qa_moderation.presentation.api.v1.responses import action_response

router = APIRouter(tags=["Answers"])


@router.post("/questions/{question_id}/answers")
async def create_answer(
    question_id: int,
    data: AnswerCreate,
    user: User = Depends(get_current_user),
    service: AnswerService = Depends(get_answer_service),
) -> JSONResponse:
    """Post an answer, subject to the per-user daily limit."""
    return action_response(await service.create_answer(question_id, user, data.body_markdown))


@router.patch("/answers/{answer_id}")
async def update_answer(
    answer_id: int,
    data: AnswerUpdate,
    user: User = Depends(get_current_user),
    service: AnswerService = Depends(get_answer_service),
) -> JSONResponse:
    """Edit an answer, or suggest the edit when the user may not edit it directly."""
    result = await service.update_answer(answer_id, user, data.body_markdown, data.edit_comment)
    return action_response(result)


@router.delete("/answers/{answer_id}")
async def delete_answer(
    answer_id: int,
    user: User = Depends(get_current_user),
    service: AnswerService = Depends(get_answer_service),
) -> JSONResponse:
    return action_response(await service.delete_answer(answer_id, user))


@router.post("/answers/{answer_id}/undelete")
async def undelete_answer(
    answer_id: int,
    user: User = Depends(get_current_user),
    service: AnswerService = Depends(get_answer_service),
) -> JSONResponse:
    return action_response(await service.undelete_answer(answer_id, user))


@router.post("/answers/{answer_id}/convert-to-comment")
async def convert_to_comment(
    answer_id: int,
    data: ConvertToCommentRequest | None = None,
    user: User = Depends(get_current_user),
    service: AnswerService = Depends(get_answer_service),
) -> JSONResponse:
    """Moderators only: replace an answer with comments carrying its text."""
    data = data or ConvertToCommentRequest()
    result = await service.convert_to_comment(
        answer_id,
        user,
        target_post_id=data.target_post_id,
        chunk_size=data.chunk_size,
    )
    return action_response(result)
