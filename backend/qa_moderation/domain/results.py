"""Structured outcomes of moderation operations.

Workflow operations never raise for expected failures (missing entity,
missing capability, invalid content, no-op, store failure, rate limit);
they return an ``ActionResult`` that the presentation layer renders.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION = "validation"
    NO_OP = "no_op"
    PERSISTENCE = "persistence"
    RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    error: ErrorKind | None = None
    message: str | None = None
    redirect_url: str | None = None
    value: Any = None

    @classmethod
    def success(
        cls,
        redirect_url: str | None = None,
        value: Any = None,
        message: str | None = None,
    ) -> "ActionResult":
        return cls(ok=True, redirect_url=redirect_url, value=value, message=message)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "ActionResult":
        return cls(ok=False, error=error, message=message)

    @classmethod
    def not_found(cls, entity_type: str, entity_id: int | str) -> "ActionResult":
        return cls.failure(ErrorKind.NOT_FOUND, f"{entity_type} with id '{entity_id}' not found")
