"""Concrete user and category repositories backed by SQLAlchemy."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import CategoryRepository, UserRepository
from qa_moderation.domain.entities import Category, User
from qa_moderation.domain.exceptions import PersistenceError
from qa_moderation.infrastructure.database.models import CategoryModel, UserModel
from qa_moderation.infrastructure.database.repositories._mapping import as_utc


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        """Map ORM model → domain entity."""
        return User(
            id=model.id,
            username=model.username,
            is_moderator=model.is_moderator,
            is_admin=model.is_admin,
            trust_level=model.trust_level,
            privileges=set(model.privileges or []),
            created_at=as_utc(model.created_at),
        )

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return self._to_entity(result) if result else None

    async def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            is_moderator=user.is_moderator,
            is_admin=user.is_admin,
            trust_level=user.trust_level,
            privileges=sorted(user.privileges),
            created_at=user.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("create user", str(exc)) from exc
        return self._to_entity(model)


class SQLAlchemyCategoryRepository(CategoryRepository):
    """Implements the CategoryRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, category_id: int) -> Category | None:
        model = await self._session.get(CategoryModel, category_id)
        if model is None:
            return None
        return Category(id=model.id, name=model.name, min_trust_level=model.min_trust_level)

    async def create(self, category: Category) -> Category:
        model = CategoryModel(name=category.name, min_trust_level=category.min_trust_level)
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("create category", str(exc)) from exc
        category.id = model.id
        return category
