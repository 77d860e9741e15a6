"""Pydantic DTOs for the outcome of a moderation action."""

from typing import Literal

from pydantic import BaseModel


class ActionResponse(BaseModel):
    """Rendered ``ActionResult`` — where to go next on success, what went wrong otherwise."""

    status: Literal["success", "error"]
    message: str | None = None
    redirect_url: str | None = None
    error: str | None = None
