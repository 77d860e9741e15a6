"""SQLAlchemy implementation of the Transaction port."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import Transaction


class SQLAlchemyTransaction(Transaction):
    """Savepoints on the request session; the request itself still commits or rolls back as a whole."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        async with self._session.begin_nested():
            yield
