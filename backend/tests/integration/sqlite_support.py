"""Throwaway SQLite databases seeded with a small Q&A site."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from qa_moderation.application.services import AuditLogService, SuggestedEditService
from qa_moderation.domain.capabilities import EDIT_POSTS, FLAG_CURATE
from qa_moderation.domain.entities import Category, Post, PostKind, ProposedFields, SuggestedEdit, User
from qa_moderation.infrastructure.authorization import PrivilegePolicy
from qa_moderation.infrastructure.database import Base, configure_sqlite_transactions
from qa_moderation.infrastructure.database.repositories import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyPostHistoryRepository,
    SQLAlchemyPostRepository,
    SQLAlchemySuggestedEditRepository,
    SQLAlchemyTransaction,
    SQLAlchemyUserRepository,
)
from qa_moderation.infrastructure.rendering import EscapingRenderer

OLD_TEXT = "old text of the answer, long enough to be a valid body"
NEW_TEXT = "new text of the answer, long enough to be a valid body"


@dataclass
class Site:
    asker: User
    author: User
    proposer: User
    reviewer: User
    curator: User
    moderator: User
    admin: User
    question: Post
    answer: Post


async def make_engine(tmp_path) -> AsyncEngine:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'qa_moderation.db'}")
    configure_sqlite_transactions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def seed(factory: async_sessionmaker[AsyncSession]) -> Site:
    async with factory() as session:
        users = SQLAlchemyUserRepository(session)
        posts = SQLAlchemyPostRepository(session)
        category = await SQLAlchemyCategoryRepository(session).create(Category(name="General"))

        asker = await users.create(User(username="asker"))
        author = await users.create(User(username="author"))
        question = await posts.create(
            Post(
                kind=PostKind.QUESTION,
                user_id=asker.id,
                category_id=category.id,
                title="How do I sort a list of tuples?",
                tags=["python", "sorting"],
                body_markdown="I have a list of (name, age) tuples and want them ordered by age.",
            )
        )
        answer = await posts.create(
            Post(
                kind=PostKind.ANSWER,
                user_id=author.id,
                parent_id=question.id,
                category_id=category.id,
                body_markdown=OLD_TEXT,
                body=f"<p>{OLD_TEXT}</p>",
            )
        )
        site = Site(
            asker=asker,
            author=author,
            proposer=await users.create(User(username="proposer")),
            reviewer=await users.create(User(username="reviewer", privileges={EDIT_POSTS})),
            curator=await users.create(User(username="curator", privileges={FLAG_CURATE})),
            moderator=await users.create(User(username="moderator", is_moderator=True)),
            admin=await users.create(User(username="admin", is_admin=True)),
            question=question,
            answer=answer,
        )
        await session.commit()
    return site


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, user_id, message, link):
        self.sent.append((user_id, message, link))


def edit_service(session: AsyncSession, notifier=None) -> SuggestedEditService:
    """A SuggestedEditService wired to real repositories on ``session``."""
    return SuggestedEditService(
        edits=SQLAlchemySuggestedEditRepository(session),
        posts=SQLAlchemyPostRepository(session),
        history=SQLAlchemyPostHistoryRepository(session),
        audit=AuditLogService(SQLAlchemyAuditLogRepository(session)),
        authorization=PrivilegePolicy(),
        renderer=EscapingRenderer(),
        notifier=notifier if notifier is not None else RecordingNotifier(),
        transaction=SQLAlchemyTransaction(session),
    )


async def create_edit(factory: async_sessionmaker[AsyncSession], site: Site) -> int:
    """Commit an active body edit of the seeded answer by the proposer."""
    async with factory() as session:
        edit = await SQLAlchemySuggestedEditRepository(session).create(
            SuggestedEdit(
                post_id=site.answer.id,
                user_id=site.proposer.id,
                fields=ProposedFields(body_markdown=NEW_TEXT, body=f"<p>{NEW_TEXT}</p>"),
            )
        )
        await session.commit()
    return edit.id
