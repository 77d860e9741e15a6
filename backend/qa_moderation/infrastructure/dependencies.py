"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.config import get_settings
from qa_moderation.application.interfaces import Notifier
from qa_moderation.application.services import (
    AnswerService,
    AuditLogService,
    NotificationService,
    PostService,
    SuggestedEditService,
)
from qa_moderation.domain.entities import User
from qa_moderation.infrastructure.authorization import PrivilegePolicy
from qa_moderation.infrastructure.database.session import async_session_factory, get_db_session
from qa_moderation.infrastructure.database.repositories import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyPostHistoryRepository,
    SQLAlchemyPostRepository,
    SQLAlchemySuggestedEditRepository,
    SQLAlchemyTransaction,
    SQLAlchemyUserRepository,
)
from qa_moderation.infrastructure.notifications import AfterCommitNotifier, BackgroundNotifier
from qa_moderation.infrastructure.rendering import EscapingRenderer


@lru_cache
def get_notifier() -> BackgroundNotifier:
    """Process-wide notifier; its pending deliveries are drained at shutdown."""
    return BackgroundNotifier(async_session_factory)


async def get_request_notifier(
    session: AsyncSession = Depends(get_db_session),
    delivery: Notifier = Depends(get_notifier),
) -> Notifier:
    """Notifications raised by a request go out only after its session commits."""
    return AfterCommitNotifier(session, delivery)


async def get_current_user(
    x_user_id: int | None = Header(default=None),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the acting user from the ``X-User-Id`` header.

    Authentication happens upstream; this only looks the id up.
    """
    if x_user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Id header")
    user = await SQLAlchemyUserRepository(session).get_by_id(x_user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return user


def _build_suggested_edit_service(session: AsyncSession, notifier: Notifier) -> SuggestedEditService:
    return SuggestedEditService(
        edits=SQLAlchemySuggestedEditRepository(session),
        posts=SQLAlchemyPostRepository(session),
        history=SQLAlchemyPostHistoryRepository(session),
        audit=AuditLogService(SQLAlchemyAuditLogRepository(session)),
        authorization=PrivilegePolicy(),
        renderer=EscapingRenderer(),
        notifier=notifier,
        transaction=SQLAlchemyTransaction(session),
    )


async def get_suggested_edit_service(
    session: AsyncSession = Depends(get_db_session),
    notifier: Notifier = Depends(get_request_notifier),
) -> AsyncGenerator[SuggestedEditService, None]:
    """Provides the edit review workflow bound to the request session."""
    yield _build_suggested_edit_service(session, notifier)


async def get_answer_service(
    session: AsyncSession = Depends(get_db_session),
    notifier: Notifier = Depends(get_request_notifier),
) -> AsyncGenerator[AnswerService, None]:
    """Provides an AnswerService with rate limits taken from settings."""
    settings = get_settings()
    yield AnswerService(
        posts=SQLAlchemyPostRepository(session),
        categories=SQLAlchemyCategoryRepository(session),
        users=SQLAlchemyUserRepository(session),
        comments=SQLAlchemyCommentRepository(session),
        history=SQLAlchemyPostHistoryRepository(session),
        audit=AuditLogService(SQLAlchemyAuditLogRepository(session)),
        suggested_edits=_build_suggested_edit_service(session, notifier),
        authorization=PrivilegePolicy(),
        renderer=EscapingRenderer(),
        notifier=notifier,
        transaction=SQLAlchemyTransaction(session),
        answer_limit=settings.rate_limit_second_level_posts,
        new_user_answer_limit=settings.rate_limit_new_user_second_level_posts,
        rate_limit_window_hours=settings.rate_limit_window_hours,
        comment_max_length=settings.comment_max_length,
    )


async def get_post_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PostService, None]:
    yield PostService(
        posts=SQLAlchemyPostRepository(session),
        history=SQLAlchemyPostHistoryRepository(session),
        comments=SQLAlchemyCommentRepository(session),
    )


async def get_audit_log_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuditLogService, None]:
    yield AuditLogService(SQLAlchemyAuditLogRepository(session))


async def get_notification_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[NotificationService, None]:
    yield NotificationService(SQLAlchemyNotificationRepository(session))
