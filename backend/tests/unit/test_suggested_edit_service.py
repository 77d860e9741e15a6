"""Unit tests for the SuggestedEditService review workflow."""

import asyncio

import pytest

from qa_moderation.application.services.suggested_edit_service import (
    INVALID_EDIT_MESSAGE,
    NO_CHANGES_MESSAGE,
)
from qa_moderation.domain.capabilities import EDIT_POSTS
from qa_moderation.domain.entities import (
    AuditLogType,
    PostHistoryType,
    ProposedFields,
    SuggestedEdit,
    SuggestedEditState,
)
from qa_moderation.domain.exceptions import EntityNotFoundError
from qa_moderation.domain.results import ErrorKind

OLD_TEXT = "old text of the answer, long enough to be a valid body"
NEW_TEXT = "new text of the answer, long enough to be a valid body"


async def _setup_answer(world, body_markdown=OLD_TEXT):
    asker = await world.add_user("asker")
    author = await world.add_user("author")
    proposer = await world.add_user("proposer")
    reviewer = await world.add_user("reviewer", privileges={EDIT_POSTS})
    question = await world.add_question(asker)
    answer = await world.add_answer(question, author, body_markdown=body_markdown)
    return question, answer, proposer, reviewer


async def _store_edit(world, post, proposer, **fields):
    return await world.edits.create(
        SuggestedEdit(post_id=post.id, user_id=proposer.id, fields=ProposedFields(**fields))
    )


# ── Propose ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_propose_edit_stores_active_edit_with_rendered_body(world):
    question, answer, proposer, _ = await _setup_answer(world)

    result = await world.suggested_edits.propose_edit(
        answer.id, proposer, ProposedFields(body_markdown=NEW_TEXT), comment="clarified"
    )

    assert result.ok
    assert result.redirect_url == f"/questions/{question.id}/answers/{answer.id}"
    edit = await world.edits.get_by_id(result.value.id)
    assert edit.state == SuggestedEditState.ACTIVE
    assert edit.fields.body_markdown == NEW_TEXT
    assert edit.fields.body == f"<p>{NEW_TEXT}</p>"
    assert edit.comment == "clarified"


@pytest.mark.asyncio
async def test_propose_edit_notifies_post_owner(world):
    question, answer, proposer, _ = await _setup_answer(world)

    await world.suggested_edits.propose_edit(answer.id, proposer, ProposedFields(body_markdown=NEW_TEXT))

    assert len(world.notifier.sent) == 1
    user_id, message, link = world.notifier.sent[0]
    assert user_id == answer.user_id
    assert message == f"Edit suggested on your answer to '{question.title}'"
    assert link == f"/questions/{question.id}/answers/{answer.id}"


@pytest.mark.asyncio
async def test_propose_edit_without_changes_is_no_op(world):
    _, answer, proposer, _ = await _setup_answer(world)

    result = await world.suggested_edits.propose_edit(answer.id, proposer, ProposedFields(body_markdown=OLD_TEXT))

    assert result.error == ErrorKind.NO_OP
    assert result.message == NO_CHANGES_MESSAGE
    assert await world.edits.list_for_post(answer.id) == []


@pytest.mark.asyncio
async def test_propose_title_on_answer_is_rejected(world):
    _, answer, proposer, _ = await _setup_answer(world)

    result = await world.suggested_edits.propose_edit(
        answer.id, proposer, ProposedFields(title="A brand new answer title")
    )

    assert result.error == ErrorKind.VALIDATION


@pytest.mark.asyncio
async def test_propose_invalid_content_is_rejected_and_not_stored(world):
    _, answer, proposer, _ = await _setup_answer(world)

    result = await world.suggested_edits.propose_edit(answer.id, proposer, ProposedFields(body_markdown="too short"))

    assert result.error == ErrorKind.VALIDATION
    assert await world.edits.list_for_post(answer.id) == []


@pytest.mark.asyncio
async def test_propose_on_missing_post_is_not_found(world):
    proposer = await world.add_user("proposer")

    result = await world.suggested_edits.propose_edit(42, proposer, ProposedFields(body_markdown=NEW_TEXT))

    assert result.error == ErrorKind.NOT_FOUND


# ── Approve ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_approve_applies_edit_and_records_history(world):
    question, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT, body=f"<p>{NEW_TEXT}</p>")

    result = await world.suggested_edits.approve(edit.id, reviewer, "looks good")

    assert result.ok
    assert result.message == "Edit approved successfully."
    assert result.redirect_url == f"/questions/{question.id}/answers/{answer.id}"

    post = await world.posts.get_by_id(answer.id)
    assert post.body_markdown == NEW_TEXT
    assert post.last_activity_by_id == proposer.id

    [entry] = world.history.entries
    assert entry.history_type == PostHistoryType.POST_EDITED
    assert entry.before == OLD_TEXT
    assert entry.after == NEW_TEXT
    assert entry.user_id == proposer.id
    assert entry.comment == "looks good"

    stored = await world.edits.get_by_id(edit.id)
    assert stored.state == SuggestedEditState.ACCEPTED
    assert stored.rejected_comment == ""
    assert stored.decided_by_id == reviewer.id
    assert stored.decided_at is not None


@pytest.mark.asyncio
async def test_approve_on_answer_only_touches_body_fields(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(
        world,
        answer,
        proposer,
        title="A title that answers never carry",
        tags=["python"],
        body_markdown=NEW_TEXT,
    )

    result = await world.suggested_edits.approve(edit.id, reviewer)

    assert result.ok
    post = await world.posts.get_by_id(answer.id)
    assert post.title is None
    assert post.tags == []
    assert post.body_markdown == NEW_TEXT


@pytest.mark.asyncio
async def test_approve_on_question_applies_title_and_tags(world):
    asker = await world.add_user("asker")
    proposer = await world.add_user("proposer")
    reviewer = await world.add_user("reviewer", privileges={EDIT_POSTS})
    question = await world.add_question(asker)
    edit = await _store_edit(world, question, proposer, title="How do I sort tuples by age?", tags=["python"])

    result = await world.suggested_edits.approve(edit.id, reviewer)

    assert result.ok
    assert result.redirect_url == f"/questions/{question.id}"
    post = await world.posts.get_by_id(question.id)
    assert post.title == "How do I sort tuples by age?"
    assert post.tags == ["python"]
    assert post.body_markdown == question.body_markdown
    assert post.locked == question.locked
    assert post.deletion is None


@pytest.mark.asyncio
async def test_approve_without_edit_capability_is_forbidden(world):
    _, answer, proposer, _ = await _setup_answer(world)
    outsider = await world.add_user("outsider")
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    result = await world.suggested_edits.approve(edit.id, outsider)

    assert result.error == ErrorKind.FORBIDDEN
    assert result.message == "You need the Edit privilege to approve edits"
    assert (await world.edits.get_by_id(edit.id)).state == SuggestedEditState.ACTIVE
    assert (await world.posts.get_by_id(answer.id)).body_markdown == OLD_TEXT
    assert world.history.entries == []


@pytest.mark.asyncio
async def test_post_author_may_approve_edits_on_own_post(world):
    _, answer, proposer, _ = await _setup_answer(world)
    author = await world.users.get_by_id(answer.user_id)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    result = await world.suggested_edits.approve(edit.id, author)

    assert result.ok


@pytest.mark.asyncio
async def test_second_approve_is_not_found_and_changes_nothing(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)
    await world.suggested_edits.approve(edit.id, reviewer)
    decided = await world.edits.get_by_id(edit.id)

    again = await world.suggested_edits.approve(edit.id, reviewer)
    reject = await world.suggested_edits.reject(edit.id, reviewer, "changed my mind")

    assert again.error == ErrorKind.NOT_FOUND
    assert reject.error == ErrorKind.NOT_FOUND
    assert await world.edits.get_by_id(edit.id) == decided
    assert len(world.history.entries) == 1


@pytest.mark.asyncio
async def test_approve_producing_invalid_post_keeps_edit_active(world):
    asker = await world.add_user("asker")
    proposer = await world.add_user("proposer")
    reviewer = await world.add_user("reviewer", privileges={EDIT_POSTS})
    question = await world.add_question(asker)
    edit = await _store_edit(world, question, proposer, tags=[])

    result = await world.suggested_edits.approve(edit.id, reviewer)

    assert result.error == ErrorKind.VALIDATION
    assert result.message == INVALID_EDIT_MESSAGE
    assert (await world.edits.get_by_id(edit.id)).state == SuggestedEditState.ACTIVE
    assert (await world.posts.get_by_id(question.id)).tags == ["python", "sorting"]


@pytest.mark.asyncio
async def test_approve_store_failure_leaves_no_side_effect(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)
    world.posts.fail_updates = True

    result = await world.suggested_edits.approve(edit.id, reviewer)

    assert result.error == ErrorKind.PERSISTENCE
    assert (await world.edits.get_by_id(edit.id)).state == SuggestedEditState.ACTIVE
    assert world.history.entries == []
    assert world.audit_repo.records == []
    assert world.notifier.sent == []


@pytest.mark.asyncio
async def test_approve_writes_moderator_audit_and_notifies_proposer(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    await world.suggested_edits.approve(edit.id, reviewer, "thanks")

    [record] = world.audit_of(AuditLogType.MODERATOR_AUDIT)
    assert record.event_type == "suggested_edit_approved"
    assert (record.related_type, record.related_id) == ("SuggestedEdit", edit.id)
    assert record.user_id == reviewer.id
    assert record.comment == "thanks"
    assert (proposer.id, "Your suggested edit was approved.") in [(u, m) for u, m, _ in world.notifier.sent]


@pytest.mark.asyncio
async def test_concurrent_approvals_have_exactly_one_winner(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    other_reviewer = await world.add_user("other", privileges={EDIT_POSTS})
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    first, second = await asyncio.gather(
        world.suggested_edits.approve(edit.id, reviewer),
        world.suggested_edits.approve(edit.id, other_reviewer),
    )

    outcomes = sorted([first.ok, second.ok])
    assert outcomes == [False, True]
    loser = first if not first.ok else second
    assert loser.error == ErrorKind.NOT_FOUND
    assert (await world.edits.get_by_id(edit.id)).state == SuggestedEditState.ACCEPTED
    assert len(world.history.entries) == 1
    assert len(world.audit_of(AuditLogType.MODERATOR_AUDIT)) == 1


@pytest.mark.asyncio
async def test_concurrent_approve_and_reject_have_exactly_one_winner(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    approved, rejected = await asyncio.gather(
        world.suggested_edits.approve(edit.id, reviewer),
        world.suggested_edits.reject(edit.id, reviewer, "not needed"),
    )

    assert approved.ok != rejected.ok
    stored = await world.edits.get_by_id(edit.id)
    if approved.ok:
        assert stored.state == SuggestedEditState.ACCEPTED
        assert rejected.error == ErrorKind.NOT_FOUND
    else:
        assert stored.state == SuggestedEditState.REJECTED
        assert approved.error == ErrorKind.NOT_FOUND
        assert (await world.posts.get_by_id(answer.id)).body_markdown == OLD_TEXT


@pytest.mark.asyncio
async def test_two_active_edits_last_approval_wins(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    later_text = "a later rewrite of the answer, also long enough"
    first = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)
    second = await _store_edit(world, answer, proposer, body_markdown=later_text)

    assert (await world.suggested_edits.approve(first.id, reviewer)).ok
    assert (await world.suggested_edits.approve(second.id, reviewer)).ok

    assert (await world.posts.get_by_id(answer.id)).body_markdown == later_text
    assert [e.before for e in world.history.entries] == [OLD_TEXT, NEW_TEXT]


# ── Reject ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_reject_never_touches_post(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    before = await world.posts.get_by_id(answer.id)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    result = await world.suggested_edits.reject(edit.id, reviewer, "changes the meaning")

    assert result.ok
    assert result.message == "Edit rejected successfully."
    assert await world.posts.get_by_id(answer.id) == before
    stored = await world.edits.get_by_id(edit.id)
    assert stored.state == SuggestedEditState.REJECTED
    assert stored.rejected_comment == "changes the meaning"
    assert stored.decided_by_id == reviewer.id
    assert world.history.entries == []


@pytest.mark.asyncio
async def test_reject_twice_is_not_found(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    first = await world.suggested_edits.reject(edit.id, reviewer, "no")
    second = await world.suggested_edits.reject(edit.id, reviewer, "still no")

    assert first.ok
    assert second.error == ErrorKind.NOT_FOUND
    assert (await world.edits.get_by_id(edit.id)).rejected_comment == "no"


@pytest.mark.asyncio
async def test_reject_without_edit_capability_is_forbidden(world):
    _, answer, proposer, _ = await _setup_answer(world)
    outsider = await world.add_user("outsider")
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)

    result = await world.suggested_edits.reject(edit.id, outsider, "no")

    assert result.error == ErrorKind.FORBIDDEN
    assert (await world.edits.get_by_id(edit.id)).state == SuggestedEditState.ACTIVE


@pytest.mark.asyncio
async def test_reject_store_failure_keeps_edit_active(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    edit = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)
    world.edits.fail_writes = True

    result = await world.suggested_edits.reject(edit.id, reviewer, "no")

    assert result.error == ErrorKind.PERSISTENCE
    assert result.message == "Cannot reject this suggested edit."
    world.edits.fail_writes = False
    assert (await world.edits.get_by_id(edit.id)).state == SuggestedEditState.ACTIVE
    assert world.audit_repo.records == []


# ── Queries ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_for_post_filters_active(world):
    _, answer, proposer, reviewer = await _setup_answer(world)
    decided = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT)
    pending = await _store_edit(world, answer, proposer, body_markdown=NEW_TEXT + " again")
    await world.suggested_edits.reject(decided.id, reviewer, "no")

    active = await world.suggested_edits.list_for_post(answer.id, active_only=True)
    everything = await world.suggested_edits.list_for_post(answer.id)

    assert [e.id for e in active] == [pending.id]
    assert len(everything) == 2


@pytest.mark.asyncio
async def test_get_missing_edit_raises(world):
    with pytest.raises(EntityNotFoundError):
        await world.suggested_edits.get_edit(999)
