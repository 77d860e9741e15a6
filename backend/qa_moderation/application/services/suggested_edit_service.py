"""Edit review workflow — proposing, approving and rejecting suggested edits."""

import logging
from dataclasses import replace
from datetime import datetime, timezone

from qa_moderation.application.interfaces import (
    AuthorizationPolicy,
    MarkdownRenderer,
    Notifier,
    PostHistoryRepository,
    PostRepository,
    SuggestedEditRepository,
    Transaction,
)
from qa_moderation.application.services.audit_log_service import AuditLogService
from qa_moderation.application.services.formatting import post_url, truncate
from qa_moderation.domain.capabilities import EDIT_POSTS
from qa_moderation.domain.edit_merge import drop_unchanged, merge_non_null
from qa_moderation.domain.entities import Post, ProposedFields, SuggestedEdit, User
from qa_moderation.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
    PostValidationError,
)
from qa_moderation.domain.results import ActionResult, ErrorKind

logger = logging.getLogger(__name__)

NO_CHANGES_MESSAGE = "No changes were saved because you didn't edit the post."
INVALID_EDIT_MESSAGE = (
    "There are issues with this suggested edit. It does not fulfill the post criteria. "
    "Reject and make the changes yourself."
)


class SuggestedEditService:
    """Orchestrates the suggested edit lifecycle.

    An edit is decided exactly once. The decision is recorded with a
    conditional write on the edit's ``active`` flag, so when two reviewers
    act on the same edit concurrently only one of them succeeds; the other
    sees the edit as not found.
    """

    def __init__(
        self,
        edits: SuggestedEditRepository,
        posts: PostRepository,
        history: PostHistoryRepository,
        audit: AuditLogService,
        authorization: AuthorizationPolicy,
        renderer: MarkdownRenderer,
        notifier: Notifier,
        transaction: Transaction,
    ):
        self._edits = edits
        self._posts = posts
        self._history = history
        self._audit = audit
        self._authz = authorization
        self._renderer = renderer
        self._notifier = notifier
        self._transaction = transaction

    # ── Queries ──────────────────────────────────────────────────────

    async def get_edit(self, edit_id: int) -> SuggestedEdit:
        edit = await self._edits.get_by_id(edit_id)
        if edit is None:
            raise EntityNotFoundError("SuggestedEdit", edit_id)
        return edit

    async def list_for_post(self, post_id: int, active_only: bool = False) -> list[SuggestedEdit]:
        if await self._posts.get_by_id(post_id) is None:
            raise EntityNotFoundError("Post", post_id)
        return await self._edits.list_for_post(post_id, active_only=active_only)

    # ── Propose ──────────────────────────────────────────────────────

    async def propose_edit(
        self,
        post_id: int,
        user: User,
        fields: ProposedFields,
        comment: str | None = None,
    ) -> ActionResult:
        """Store a proposed change to a post as an active suggested edit."""
        post = await self._posts.get_by_id(post_id)
        if post is None:
            return ActionResult.not_found("Post", post_id)
        if post.is_answer and (fields.title is not None or fields.tags is not None):
            return ActionResult.failure(ErrorKind.VALIDATION, "Answers cannot have a title or tags.")

        proposed = drop_unchanged(post, fields)
        if proposed.is_empty():
            return ActionResult.failure(ErrorKind.NO_OP, NO_CHANGES_MESSAGE)
        if proposed.body_markdown is not None:
            proposed = replace(proposed, body=self._renderer.render(proposed.body_markdown))

        now = datetime.now(timezone.utc)
        preview = post.with_changes(
            merge_non_null(post, proposed, activity_at=now, activity_by_id=user.id)
        )
        errors = preview.validation_errors()
        if errors:
            return ActionResult.failure(ErrorKind.VALIDATION, " ".join(errors))

        try:
            edit = await self._edits.create(
                SuggestedEdit(post_id=post.id, user_id=user.id, fields=proposed, comment=comment)
            )
        except PersistenceError as exc:
            return ActionResult.failure(ErrorKind.PERSISTENCE, str(exc))

        logger.info("Edit %s suggested on post %s by user %s", edit.id, post.id, user.id)
        if post.user_id != user.id:
            self._notifier.notify(
                post.user_id,
                f"Edit suggested on your {await self._describe(post)}",
                post_url(post),
            )
        return ActionResult.success(redirect_url=post_url(post), value=edit)

    # ── Decide ───────────────────────────────────────────────────────

    async def approve(self, edit_id: int, reviewer: User, edit_comment: str | None = None) -> ActionResult:
        """Apply an active edit to its post and mark it accepted."""
        edit = await self._edits.get_by_id(edit_id)
        if edit is None or not edit.active:
            return ActionResult.not_found("SuggestedEdit", edit_id)
        post = await self._posts.get_by_id(edit.post_id)
        if post is None:
            return ActionResult.not_found("Post", edit.post_id)
        if not self._authz.has_capability(reviewer, EDIT_POSTS, post):
            return ActionResult.failure(ErrorKind.FORBIDDEN, "You need the Edit privilege to approve edits")

        now = datetime.now(timezone.utc)
        # Activity is attributed to the author of the content, not the reviewer.
        changes = merge_non_null(post, edit.fields, activity_at=now, activity_by_id=edit.user_id)
        if post.with_changes(changes).validation_errors():
            return ActionResult.failure(ErrorKind.VALIDATION, INVALID_EDIT_MESSAGE)

        edit.accept(reviewer.id, now)
        after = changes.body_markdown if changes.body_markdown is not None else post.body_markdown
        try:
            async with self._transaction.savepoint():
                claimed = await self._edits.record_decision(edit)
                if claimed:
                    await self._history.record_edit(
                        post,
                        edit.user_id,
                        before=post.body_markdown,
                        after=after,
                        comment=edit_comment,
                    )
                    post = await self._posts.update(post.id, changes)
                    await self._audit.moderator_audit(
                        event_type="suggested_edit_approved",
                        related=edit,
                        user=reviewer,
                        comment=edit_comment or "",
                    )
        except PostValidationError:
            return ActionResult.failure(ErrorKind.VALIDATION, INVALID_EDIT_MESSAGE)
        except EntityNotFoundError:
            return ActionResult.not_found("Post", edit.post_id)
        except PersistenceError as exc:
            logger.error("Approving edit %s failed: %s", edit_id, exc)
            return ActionResult.failure(ErrorKind.PERSISTENCE, "Could not approve suggested edit.")

        if not claimed:
            logger.warning("Edit %s was decided concurrently; approval by %s dropped", edit_id, reviewer.id)
            return ActionResult.not_found("SuggestedEdit", edit_id)

        logger.info("Edit %s approved by user %s", edit_id, reviewer.id)
        if edit.user_id != reviewer.id:
            self._notifier.notify(edit.user_id, "Your suggested edit was approved.", post_url(post))
        return ActionResult.success(
            redirect_url=post_url(post),
            value=edit,
            message="Edit approved successfully.",
        )

    async def reject(self, edit_id: int, reviewer: User, rejection_comment: str | None = None) -> ActionResult:
        """Mark an active edit rejected. The post itself is never touched."""
        edit = await self._edits.get_by_id(edit_id)
        if edit is None or not edit.active:
            return ActionResult.not_found("SuggestedEdit", edit_id)
        post = await self._posts.get_by_id(edit.post_id)
        if post is None:
            return ActionResult.not_found("Post", edit.post_id)
        if not self._authz.has_capability(reviewer, EDIT_POSTS, post):
            return ActionResult.failure(ErrorKind.FORBIDDEN, "You need the Edit privilege to reject edits")

        edit.reject(reviewer.id, rejection_comment or "")
        try:
            async with self._transaction.savepoint():
                claimed = await self._edits.record_decision(edit)
                if claimed:
                    await self._audit.moderator_audit(
                        event_type="suggested_edit_rejected",
                        related=edit,
                        user=reviewer,
                        comment=rejection_comment or "",
                    )
        except PersistenceError as exc:
            logger.error("Rejecting edit %s failed: %s", edit_id, exc)
            return ActionResult.failure(ErrorKind.PERSISTENCE, "Cannot reject this suggested edit.")

        if not claimed:
            logger.warning("Edit %s was decided concurrently; rejection by %s dropped", edit_id, reviewer.id)
            return ActionResult.not_found("SuggestedEdit", edit_id)

        logger.info("Edit %s rejected by user %s", edit_id, reviewer.id)
        if edit.user_id != reviewer.id:
            self._notifier.notify(edit.user_id, "Your suggested edit was rejected.", post_url(post))
        return ActionResult.success(
            redirect_url=post_url(post),
            value=edit,
            message="Edit rejected successfully.",
        )

    async def _describe(self, post: Post) -> str:
        if post.is_question:
            return f"question '{truncate(post.title)}'"
        question = await self._posts.get_by_id(post.parent_id)
        title = question.title if question is not None else ""
        return f"answer to '{truncate(title)}'"
