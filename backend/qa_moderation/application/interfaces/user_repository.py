"""Abstract repository interfaces (ports) for users and categories."""

from abc import ABC, abstractmethod

from qa_moderation.domain.entities import Category, User


class UserRepository(ABC):
    """Port for user lookup — accounts are managed outside this service."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieve a single user by ID."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user and return it with the generated ID."""
        ...


class CategoryRepository(ABC):
    """Port for category lookup."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Category | None:
        ...

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...
