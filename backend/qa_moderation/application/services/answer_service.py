"""Answer use cases — creation behind the rate limit, direct edits, curation and conversion."""

import logging
from datetime import datetime, timedelta, timezone

from qa_moderation.application.interfaces import (
    AuthorizationPolicy,
    CategoryRepository,
    CommentRepository,
    MarkdownRenderer,
    Notifier,
    PostHistoryRepository,
    PostRepository,
    Transaction,
    UserRepository,
)
from qa_moderation.application.services.audit_log_service import AuditLogService
from qa_moderation.application.services.formatting import post_url, question_url, truncate
from qa_moderation.application.services.suggested_edit_service import (
    NO_CHANGES_MESSAGE,
    SuggestedEditService,
)
from qa_moderation.domain.capabilities import EDIT_POSTS, FLAG_CURATE, MODERATOR, UNRESTRICTED
from qa_moderation.domain.edit_merge import split_into_chunks
from qa_moderation.domain.entities import (
    COMMENT_MAX_LENGTH,
    Comment,
    Post,
    PostChanges,
    PostDeletion,
    PostKind,
    ProposedFields,
    User,
)
from qa_moderation.domain.exceptions import (
    CommentValidationError,
    PersistenceError,
    PostValidationError,
)
from qa_moderation.domain.results import ActionResult, ErrorKind

logger = logging.getLogger(__name__)


class AnswerService:
    """Answer operations performed directly by their author or by curators.

    Users without direct edit rights on an answer are routed into the
    suggested edit workflow instead of being refused.
    """

    def __init__(
        self,
        posts: PostRepository,
        categories: CategoryRepository,
        users: UserRepository,
        comments: CommentRepository,
        history: PostHistoryRepository,
        audit: AuditLogService,
        suggested_edits: SuggestedEditService,
        authorization: AuthorizationPolicy,
        renderer: MarkdownRenderer,
        notifier: Notifier,
        transaction: Transaction,
        *,
        answer_limit: int = 20,
        new_user_answer_limit: int = 3,
        rate_limit_window_hours: int = 24,
        comment_max_length: int = COMMENT_MAX_LENGTH,
    ):
        self._posts = posts
        self._categories = categories
        self._users = users
        self._comments = comments
        self._history = history
        self._audit = audit
        self._suggested_edits = suggested_edits
        self._authz = authorization
        self._renderer = renderer
        self._notifier = notifier
        self._transaction = transaction
        self._answer_limit = answer_limit
        self._new_user_answer_limit = new_user_answer_limit
        self._window = timedelta(hours=rate_limit_window_hours)
        self._comment_max_length = comment_max_length

    # ── Create ───────────────────────────────────────────────────────

    async def create_answer(self, question_id: int, actor: User, body_markdown: str) -> ActionResult:
        question = await self._posts.get_by_id(question_id)
        if question is None or not question.is_question:
            return ActionResult.not_found("Question", question_id)

        now = datetime.now(timezone.utc)
        answer = Post(
            kind=PostKind.ANSWER,
            user_id=actor.id,
            parent_id=question.id,
            category_id=question.category_id,
            body_markdown=body_markdown,
            body=self._renderer.render(body_markdown),
            last_activity_at=now,
            last_activity_by_id=actor.id,
            created_at=now,
        )

        unrestricted = self._authz.has_capability(actor, UNRESTRICTED)
        limit = self._answer_limit if unrestricted else self._new_user_answer_limit
        recent = await self._posts.count_recent_by_user(actor.id, PostKind.ANSWER, now - self._window)
        if recent >= limit:
            message = f"You may only post {limit} answers per day."
            if not unrestricted:
                message += " Once you have some well-received posts, that limit will increase."
            await self._audit.rate_limit_log(
                event_type="second_level_post",
                related=question,
                user=actor,
                comment=f"limit: {limit}\n\npost:\n{_attributes_print(answer)}",
            )
            logger.warning("User %s hit the answer limit (%d) on question %s", actor.id, limit, question.id)
            return ActionResult.failure(ErrorKind.RATE_LIMITED, message)

        try:
            created = await self._posts.create(answer)
        except PostValidationError as exc:
            return ActionResult.failure(ErrorKind.VALIDATION, " ".join(exc.errors))
        except PersistenceError as exc:
            return ActionResult.failure(ErrorKind.PERSISTENCE, str(exc))

        try:
            await self._posts.update(
                question.id, PostChanges(last_activity_at=now, last_activity_by_id=actor.id)
            )
        except PostValidationError as exc:
            logger.warning("Could not bump activity on question %s: %s", question.id, exc)

        logger.info("Answer %s created on question %s by user %s", created.id, question.id, actor.id)
        if question.user_id != actor.id:
            self._notifier.notify(
                question.user_id,
                f"New answer to your question '{truncate(question.title)}'",
                question_url(question.id),
            )
        return ActionResult.success(redirect_url=question_url(question.id), value=created)

    # ── Edit ─────────────────────────────────────────────────────────

    async def update_answer(
        self,
        answer_id: int,
        actor: User,
        body_markdown: str,
        edit_comment: str | None = None,
    ) -> ActionResult:
        """Edit an answer directly, or suggest the edit when the actor may not edit directly."""
        answer = await self._get_answer(answer_id)
        if answer is None:
            return ActionResult.not_found("Answer", answer_id)
        locked = self._locked_result(answer, actor)
        if locked is not None:
            return locked

        if not await self._may_edit_directly(answer, actor):
            return await self._suggested_edits.propose_edit(
                answer.id,
                actor,
                ProposedFields(body_markdown=body_markdown),
                comment=edit_comment,
            )

        if body_markdown == answer.body_markdown:
            return ActionResult.failure(ErrorKind.NO_OP, NO_CHANGES_MESSAGE)

        now = datetime.now(timezone.utc)
        changes = PostChanges(
            body=self._renderer.render(body_markdown),
            body_markdown=body_markdown,
            last_activity_at=now,
            last_activity_by_id=actor.id,
            last_edited_at=now,
            last_edited_by_id=actor.id,
        )
        before = answer.body_markdown
        try:
            async with self._transaction.savepoint():
                updated = await self._posts.update(answer.id, changes)
                await self._history.record_edit(
                    updated, actor.id, before=before, after=body_markdown, comment=edit_comment
                )
        except PostValidationError as exc:
            return ActionResult.failure(ErrorKind.VALIDATION, " ".join(exc.errors))
        except PersistenceError as exc:
            return ActionResult.failure(ErrorKind.PERSISTENCE, str(exc))

        logger.info("Answer %s edited by user %s", answer.id, actor.id)
        return ActionResult.success(redirect_url=post_url(updated), value=updated)

    # ── Curate ───────────────────────────────────────────────────────

    async def delete_answer(self, answer_id: int, actor: User) -> ActionResult:
        answer = await self._get_answer(answer_id)
        if answer is None:
            return ActionResult.not_found("Answer", answer_id)
        locked = self._locked_result(answer, actor)
        if locked is not None:
            return locked
        if not self._authz.has_capability(actor, FLAG_CURATE, answer):
            return ActionResult.failure(
                ErrorKind.FORBIDDEN, "You need the Curate privilege to delete this answer."
            )
        if answer.deleted:
            return ActionResult.failure(ErrorKind.NO_OP, "Can't delete a deleted answer.")

        now = datetime.now(timezone.utc)
        changes = PostChanges(
            deletion=PostDeletion(deleted_by_id=actor.id, deleted_at=now),
            last_activity_at=now,
            last_activity_by_id=actor.id,
        )
        try:
            async with self._transaction.savepoint():
                updated = await self._posts.update(answer.id, changes)
                await self._history.record_delete(updated, actor.id)
        except (PostValidationError, PersistenceError) as exc:
            logger.error("Deleting answer %s failed: %s", answer.id, exc)
            return ActionResult.failure(
                ErrorKind.PERSISTENCE, "Can't delete this answer right now. Try again later."
            )

        logger.info("Answer %s deleted by user %s", answer.id, actor.id)
        return ActionResult.success(redirect_url=question_url(answer.parent_id), value=updated)

    async def undelete_answer(self, answer_id: int, actor: User) -> ActionResult:
        answer = await self._get_answer(answer_id)
        if answer is None:
            return ActionResult.not_found("Answer", answer_id)
        locked = self._locked_result(answer, actor)
        if locked is not None:
            return locked
        if not self._authz.has_capability(actor, FLAG_CURATE, answer):
            return ActionResult.failure(
                ErrorKind.FORBIDDEN, "You need the Curate privilege to undelete this answer."
            )
        if not answer.deleted:
            return ActionResult.failure(ErrorKind.NO_OP, "Can't undelete an undeleted answer.")

        deleter = await self._users.get_by_id(answer.deletion.deleted_by_id)
        if deleter is not None and deleter.has_moderator_standing and not actor.has_moderator_standing:
            return ActionResult.failure(
                ErrorKind.FORBIDDEN, "You cannot undelete this post deleted by a moderator."
            )

        now = datetime.now(timezone.utc)
        changes = PostChanges(clear_deletion=True, last_activity_at=now, last_activity_by_id=actor.id)
        try:
            async with self._transaction.savepoint():
                updated = await self._posts.update(answer.id, changes)
                await self._history.record_undelete(updated, actor.id)
        except (PostValidationError, PersistenceError) as exc:
            logger.error("Undeleting answer %s failed: %s", answer.id, exc)
            return ActionResult.failure(
                ErrorKind.PERSISTENCE, "Can't undelete this answer right now. Try again later."
            )

        logger.info("Answer %s undeleted by user %s", answer.id, actor.id)
        return ActionResult.success(redirect_url=question_url(answer.parent_id), value=updated)

    async def convert_to_comment(
        self,
        answer_id: int,
        actor: User,
        target_post_id: int | None = None,
        chunk_size: int | None = None,
    ) -> ActionResult:
        """Turn an answer into comments on ``target_post_id`` (default: its question).

        One-way: the answer stays deleted and undeleting it does not remove the
        comments. The created comment ids are listed in a moderator audit record.
        """
        answer = await self._get_answer(answer_id)
        if answer is None:
            return ActionResult.not_found("Answer", answer_id)
        if not self._authz.has_capability(actor, MODERATOR):
            return ActionResult.failure(ErrorKind.FORBIDDEN, "Only moderators can convert answers to comments.")
        if answer.deleted:
            return ActionResult.failure(ErrorKind.NO_OP, "Can't convert a deleted answer.")

        target_id = target_post_id if target_post_id is not None else answer.parent_id
        if await self._posts.get_by_id(target_id) is None:
            return ActionResult.not_found("Post", target_id)

        size = chunk_size or self._comment_max_length
        if size > self._comment_max_length:
            return ActionResult.failure(
                ErrorKind.VALIDATION,
                f"Comments may be at most {self._comment_max_length} characters long.",
            )

        now = datetime.now(timezone.utc)
        created: list[int] = []
        try:
            async with self._transaction.savepoint():
                for chunk in split_into_chunks(answer.body_markdown, size):
                    comment = Comment(post_id=target_id, user_id=answer.user_id, content=chunk)
                    comment.validate(self._comment_max_length)
                    saved = await self._comments.create(comment)
                    created.append(saved.id)
                await self._posts.update(
                    answer.id,
                    PostChanges(deletion=PostDeletion(deleted_by_id=actor.id, deleted_at=now)),
                )
                await self._audit.moderator_audit(
                    event_type="convert_to_comment",
                    related=answer,
                    user=actor,
                    comment=", ".join(str(comment_id) for comment_id in created),
                )
        except (CommentValidationError, PostValidationError) as exc:
            return ActionResult.failure(ErrorKind.VALIDATION, str(exc))
        except PersistenceError as exc:
            return ActionResult.failure(ErrorKind.PERSISTENCE, str(exc))

        logger.info("Answer %s converted to %d comments by user %s", answer.id, len(created), actor.id)
        return ActionResult.success(redirect_url=question_url(answer.parent_id), value=created)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _get_answer(self, answer_id: int) -> Post | None:
        post = await self._posts.get_by_id(answer_id)
        if post is None or not post.is_answer:
            return None
        return post

    async def _may_edit_directly(self, answer: Post, actor: User) -> bool:
        if not self._authz.has_capability(actor, EDIT_POSTS, answer):
            return False
        question = await self._posts.get_by_id(answer.parent_id)
        if question is None or question.category_id is None:
            return False
        category = await self._categories.get_by_id(question.category_id)
        return category is not None and category.permits(actor.trust_level)

    @staticmethod
    def _locked_result(post: Post, actor: User) -> ActionResult | None:
        if post.locked and not actor.has_moderator_standing:
            return ActionResult.failure(ErrorKind.FORBIDDEN, "This post is locked.")
        return None


def _attributes_print(post: Post) -> str:
    attributes = {
        "post_type": post.kind.value,
        "user_id": post.user_id,
        "parent_id": post.parent_id,
        "category_id": post.category_id,
        "body_markdown": post.body_markdown,
    }
    return "\n".join(f"{key}: {value}" for key, value in attributes.items())

