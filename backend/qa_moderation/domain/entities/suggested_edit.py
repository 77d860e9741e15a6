"""Domain entity for suggested edits — proposed changes awaiting review."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from qa_moderation.domain.exceptions import InvalidStateTransitionError


class SuggestedEditState(str, Enum):
    """Lifecycle states of a suggested edit. Accepted and Rejected are terminal."""

    ACTIVE = "active"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ProposedFields:
    """Content fields an edit proposes. ``None`` means no change proposed for that field."""

    title: str | None = None
    tags: list[str] | None = None
    body: str | None = None
    body_markdown: str | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.title, self.tags, self.body, self.body_markdown)
        )


@dataclass
class SuggestedEdit:
    """A proposed content change to a post, decided once by a reviewer."""

    post_id: int
    user_id: int
    fields: ProposedFields
    id: int | None = None
    comment: str | None = None
    active: bool = True
    accepted: bool = False
    decided_at: datetime | None = None
    decided_by_id: int | None = None
    rejected_comment: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def state(self) -> SuggestedEditState:
        if self.active:
            return SuggestedEditState.ACTIVE
        if self.accepted:
            return SuggestedEditState.ACCEPTED
        return SuggestedEditState.REJECTED

    def accept(self, reviewer_id: int, now: datetime | None = None) -> None:
        """Transition Active → Accepted."""
        self._ensure_active()
        now = now or datetime.now(timezone.utc)
        self.active = False
        self.accepted = True
        self.rejected_comment = ""
        self.decided_at = now
        self.decided_by_id = reviewer_id
        self.updated_at = now

    def reject(self, reviewer_id: int, comment: str, now: datetime | None = None) -> None:
        """Transition Active → Rejected, keeping the reviewer's reason."""
        self._ensure_active()
        now = now or datetime.now(timezone.utc)
        self.active = False
        self.accepted = False
        self.rejected_comment = comment
        self.decided_at = now
        self.decided_by_id = reviewer_id
        self.updated_at = now

    def _ensure_active(self) -> None:
        if not self.active:
            raise InvalidStateTransitionError("SuggestedEdit", self.id, self.state.value)
