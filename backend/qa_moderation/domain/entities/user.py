"""Domain entities for users and categories."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class User:
    """An account acting on posts. Authentication lives outside this service."""

    username: str
    id: int | None = None
    is_moderator: bool = False
    is_admin: bool = False
    trust_level: int = 0
    privileges: set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_moderator_standing(self) -> bool:
        return self.is_moderator or self.is_admin


@dataclass
class Category:
    """A post category; ``min_trust_level`` gates direct editing of its posts."""

    name: str
    id: int | None = None
    min_trust_level: int | None = None

    def permits(self, trust_level: int) -> bool:
        """Return True if a user with ``trust_level`` may post in this category."""
        required = self.min_trust_level if self.min_trust_level is not None else -1
        return required <= trust_level
