"""Abstract repository interface (port) for suggested edits."""

from abc import ABC, abstractmethod

from qa_moderation.domain.entities import SuggestedEdit


class SuggestedEditRepository(ABC):
    """Port for suggested edit persistence."""

    @abstractmethod
    async def get_by_id(self, edit_id: int) -> SuggestedEdit | None:
        ...

    @abstractmethod
    async def list_for_post(self, post_id: int, active_only: bool = False) -> list[SuggestedEdit]:
        """Edits proposed on a post, oldest first."""
        ...

    @abstractmethod
    async def create(self, edit: SuggestedEdit) -> SuggestedEdit:
        ...

    @abstractmethod
    async def record_decision(self, edit: SuggestedEdit) -> bool:
        """Persist the decision fields of ``edit`` only if the stored row is still active.

        Returns False when another request decided the edit first; nothing is
        written in that case. Raises PersistenceError if the write fails.
        """
        ...
