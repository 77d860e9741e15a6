"""Two reviewers deciding the same edit at once, each in its own SQLite session."""

import asyncio

import pytest

from sqlite_support import (
    NEW_TEXT,
    OLD_TEXT,
    RecordingNotifier,
    create_edit,
    edit_service,
    make_engine,
    make_session_factory,
    seed,
)
from qa_moderation.domain.entities import PostHistoryType, SuggestedEditState
from qa_moderation.domain.results import ErrorKind
from qa_moderation.infrastructure.database.repositories import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyPostHistoryRepository,
    SQLAlchemyPostRepository,
    SQLAlchemySuggestedEditRepository,
)


async def _decide(factory, notifier, decide):
    """Run one decision in a request-like session: commit on success, roll back otherwise."""
    async with factory() as session:
        try:
            result = await decide(edit_service(session, notifier))
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    return result


async def _stored_state(factory, site, edit_id):
    async with factory() as session:
        edit = await SQLAlchemySuggestedEditRepository(session).get_by_id(edit_id)
        post = await SQLAlchemyPostRepository(session).get_by_id(site.answer.id)
        history = await SQLAlchemyPostHistoryRepository(session).list_for_post(site.answer.id)
        audit = await SQLAlchemyAuditLogRepository(session).list_records()
    return edit, post, history, audit


@pytest.mark.asyncio
async def test_concurrent_approvals_yield_one_success_and_one_not_found(tmp_path):
    engine = await make_engine(tmp_path)
    try:
        factory = make_session_factory(engine)
        site = await seed(factory)
        edit_id = await create_edit(factory, site)
        notifier = RecordingNotifier()

        results = await asyncio.gather(
            _decide(factory, notifier, lambda s: s.approve(edit_id, site.reviewer, "first")),
            _decide(factory, notifier, lambda s: s.approve(edit_id, site.moderator, "second")),
        )

        assert sorted(r.ok for r in results) == [False, True]
        [loser] = [r for r in results if not r.ok]
        assert loser.error == ErrorKind.NOT_FOUND

        edit, post, history, audit = await _stored_state(factory, site, edit_id)
        assert edit.state == SuggestedEditState.ACCEPTED
        assert post.body_markdown == NEW_TEXT
        assert [(h.history_type, h.before, h.after) for h in history] == [
            (PostHistoryType.POST_EDITED, OLD_TEXT, NEW_TEXT)
        ]
        assert [r.event_type for r in audit] == ["suggested_edit_approved"]
        assert [n[0] for n in notifier.sent] == [site.proposer.id]
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_concurrent_approve_and_reject_leave_one_consistent_outcome(tmp_path):
    engine = await make_engine(tmp_path)
    try:
        factory = make_session_factory(engine)
        site = await seed(factory)
        edit_id = await create_edit(factory, site)

        approved, rejected = await asyncio.gather(
            _decide(factory, RecordingNotifier(), lambda s: s.approve(edit_id, site.reviewer)),
            _decide(factory, RecordingNotifier(), lambda s: s.reject(edit_id, site.moderator, "off topic")),
        )

        assert approved.ok != rejected.ok
        loser = rejected if approved.ok else approved
        assert loser.error == ErrorKind.NOT_FOUND

        edit, post, history, audit = await _stored_state(factory, site, edit_id)
        if approved.ok:
            assert edit.state == SuggestedEditState.ACCEPTED
            assert edit.decided_by_id == site.reviewer.id
            assert post.body_markdown == NEW_TEXT
            assert len(history) == 1
            assert [r.event_type for r in audit] == ["suggested_edit_approved"]
        else:
            assert edit.state == SuggestedEditState.REJECTED
            assert edit.decided_by_id == site.moderator.id
            assert edit.rejected_comment == "off topic"
            assert post.body_markdown == OLD_TEXT
            assert history == []
            assert [r.event_type for r in audit] == ["suggested_edit_rejected"]
    finally:
        await engine.dispose()
