"""Pydantic DTOs for answer operations."""

from pydantic import BaseModel, Field


class AnswerCreate(BaseModel):
    body_markdown: str = Field(..., min_length=1)


class AnswerUpdate(BaseModel):
    """New answer body. Becomes a suggested edit when the actor may not edit directly."""

    body_markdown: str = Field(..., min_length=1)
    edit_comment: str | None = Field(None, max_length=255)


class ConvertToCommentRequest(BaseModel):
    """Where the comments go (default: the answer's question) and how large each piece is."""

    target_post_id: int | None = None
    chunk_size: int | None = Field(None, gt=0)
