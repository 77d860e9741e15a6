"""Request-scoped notifier that only hands messages on once the request commits."""

import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import Notifier

logger = logging.getLogger(__name__)


class AfterCommitNotifier(Notifier):
    """Buffers notifications raised while a session's transaction is open.

    On commit the buffer is passed to ``delivery``; on rollback of the outer
    transaction it is dropped, so nobody hears about a change that was never
    saved. Rolling back a savepoint keeps the buffer.
    """

    def __init__(self, session: AsyncSession, delivery: Notifier) -> None:
        self._delivery = delivery
        self._pending: list[tuple[int, str, str]] = []
        event.listen(session.sync_session, "after_commit", self._release)
        event.listen(session.sync_session, "after_soft_rollback", self._discard)

    def notify(self, user_id: int, message: str, link: str) -> None:
        self._pending.append((user_id, message, link))

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _release(self, session) -> None:
        pending, self._pending = self._pending, []
        for user_id, message, link in pending:
            self._delivery.notify(user_id, message, link)

    def _discard(self, session, previous_transaction) -> None:
        if previous_transaction.nested or not self._pending:
            return
        logger.info("Dropping %d notification(s) of a rolled back transaction", len(self._pending))
        self._pending = []
