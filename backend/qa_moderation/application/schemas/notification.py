"""Pydantic DTOs for user notifications."""

from datetime import datetime

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: int
    content: str
    link: str
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}
