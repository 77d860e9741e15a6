"""Authorization port — the single policy entry point for capability checks."""

from abc import ABC, abstractmethod

from qa_moderation.domain.entities import Post, User


class AuthorizationPolicy(ABC):

    @abstractmethod
    def has_capability(self, user: User, capability: str, target: Post | None = None) -> bool:
        """Return True if ``user`` holds ``capability``, optionally scoped to ``target``."""
        ...
