"""Pydantic DTOs for the suggested edit review workflow."""

from datetime import datetime

from pydantic import BaseModel, Field

from qa_moderation.domain.entities import SuggestedEdit


class SuggestedEditCreate(BaseModel):
    """Proposed changes to a post. Omitted fields are left as they are."""

    title: str | None = Field(None, examples=["How do I reverse a list in place?"])
    tags: list[str] | None = Field(None, examples=[["python", "lists"]])
    body_markdown: str | None = None
    comment: str | None = Field(None, max_length=255, examples=["Fixed code formatting"])


class EditDecision(BaseModel):
    """Optional reviewer note attached to an approval or rejection."""

    comment: str | None = Field(None, max_length=255)


class SuggestedEditResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    post_id: int
    user_id: int
    state: str
    title: str | None
    tags: list[str] | None
    body: str | None
    body_markdown: str | None
    comment: str | None
    decided_at: datetime | None
    decided_by_id: int | None
    rejected_comment: str | None
    created_at: datetime

    @classmethod
    def from_entity(cls, edit: SuggestedEdit) -> "SuggestedEditResponse":
        return cls(
            id=edit.id,
            post_id=edit.post_id,
            user_id=edit.user_id,
            state=edit.state.value,
            title=edit.fields.title,
            tags=edit.fields.tags,
            body=edit.fields.body,
            body_markdown=edit.fields.body_markdown,
            comment=edit.comment,
            decided_at=edit.decided_at,
            decided_by_id=edit.decided_by_id,
            rejected_comment=edit.rejected_comment,
            created_at=edit.created_at,
        )
