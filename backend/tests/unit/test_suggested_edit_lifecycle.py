"""Unit tests for the suggested edit state machine and edit merging."""

from datetime import datetime, timezone

import pytest

from qa_moderation.domain.edit_merge import drop_unchanged, merge_non_null, split_into_chunks
from qa_moderation.domain.entities import (
    Post,
    PostKind,
    ProposedFields,
    SuggestedEdit,
    SuggestedEditState,
)
from qa_moderation.domain.exceptions import InvalidStateTransitionError

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _edit() -> SuggestedEdit:
    return SuggestedEdit(post_id=1, user_id=2, fields=ProposedFields(body_markdown="x" * 40), id=7)


def _question() -> Post:
    return Post(
        kind=PostKind.QUESTION,
        user_id=1,
        id=10,
        title="How do I parse dates in Python?",
        tags=["python", "datetime"],
        body_markdown="I keep getting ValueError from strptime on ISO strings.",
    )


def _answer() -> Post:
    return Post(
        kind=PostKind.ANSWER,
        user_id=1,
        id=11,
        parent_id=10,
        body_markdown="Use datetime.fromisoformat for ISO 8601 input strings.",
    )


def test_new_edit_is_active():
    edit = _edit()
    assert edit.state == SuggestedEditState.ACTIVE
    assert edit.decided_at is None
    assert edit.decided_by_id is None


def test_accept_sets_decision_fields():
    edit = _edit()
    edit.accept(reviewer_id=3, now=NOW)
    assert edit.state == SuggestedEditState.ACCEPTED
    assert (edit.active, edit.accepted) == (False, True)
    assert edit.rejected_comment == ""
    assert (edit.decided_by_id, edit.decided_at) == (3, NOW)


def test_reject_keeps_reason():
    edit = _edit()
    edit.reject(reviewer_id=3, comment="spam", now=NOW)
    assert edit.state == SuggestedEditState.REJECTED
    assert (edit.active, edit.accepted) == (False, False)
    assert edit.rejected_comment == "spam"


@pytest.mark.parametrize("decide", [
    lambda e: e.accept(reviewer_id=4),
    lambda e: e.reject(reviewer_id=4, comment="again"),
])
def test_terminal_edits_cannot_be_decided_again(decide):
    edit = _edit()
    edit.accept(reviewer_id=3, now=NOW)
    with pytest.raises(InvalidStateTransitionError):
        decide(edit)
    assert edit.decided_by_id == 3


def test_merge_for_question_takes_only_proposed_fields():
    changes = merge_non_null(
        _question(), ProposedFields(title="How do I parse ISO dates?"), activity_at=NOW, activity_by_id=5
    )
    assert changes.changed_fields() == {"title", "last_activity_at", "last_activity_by_id"}
    assert changes.last_activity_by_id == 5


def test_merge_for_answer_ignores_title_and_tags():
    changes = merge_non_null(
        _answer(),
        ProposedFields(title="ignored title", tags=["ignored"], body_markdown="y" * 40),
        activity_at=NOW,
        activity_by_id=5,
    )
    assert changes.changed_fields() == {"body_markdown", "last_activity_at", "last_activity_by_id"}


def test_merge_drops_blank_tags():
    changes = merge_non_null(
        _question(), ProposedFields(tags=["python", " ", ""]), activity_at=NOW, activity_by_id=5
    )
    assert changes.tags == ["python"]


def test_drop_unchanged_keeps_only_real_changes():
    question = _question()
    proposed = drop_unchanged(
        question,
        ProposedFields(title=question.title, tags=["python", "datetime"], body_markdown="z" * 40),
    )
    assert proposed == ProposedFields(body_markdown="z" * 40)


def test_drop_unchanged_of_identical_edit_is_empty():
    answer = _answer()
    assert drop_unchanged(answer, ProposedFields(body_markdown=answer.body_markdown)).is_empty()


@pytest.mark.parametrize("length, expected", [(1, 1), (500, 1), (501, 2), (1500, 3), (1501, 4)])
def test_split_into_chunks_count(length, expected):
    text = "a" * length
    chunks = split_into_chunks(text, 500)
    assert len(chunks) == expected
    assert all(len(c) <= 500 for c in chunks)
    assert "".join(chunks) == text


def test_split_into_chunks_rejects_non_positive_size():
    with pytest.raises(ValueError):
        split_into_chunks("abc", 0)
