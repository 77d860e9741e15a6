"""Domain entity for posts (questions and answers)."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from qa_moderation.domain.exceptions import PostValidationError

TITLE_MIN_LENGTH = 15
TITLE_MAX_LENGTH = 255
BODY_MIN_LENGTH = 30
BODY_MAX_LENGTH = 30000
MIN_TAGS = 1
MAX_TAGS = 5
CONTENT_FIELDS = frozenset({"title", "tags", "body", "body_markdown"})


class PostKind(str, Enum):
    """Discriminator between the two post types."""

    QUESTION = "question"
    ANSWER = "answer"


@dataclass(frozen=True)
class PostDeletion:
    """Deletion state tag — a post is either live (no tag) or deleted by someone at some time."""

    deleted_by_id: int
    deleted_at: datetime


@dataclass(frozen=True)
class PostChanges:
    """Field set written to a post by the Post Store.

    ``None`` means "leave unchanged". Deletion is handled separately through
    ``deletion``/``clear_deletion`` so the three deletion columns can never be
    set independently.
    """

    title: str | None = None
    tags: list[str] | None = None
    body: str | None = None
    body_markdown: str | None = None
    last_activity_at: datetime | None = None
    last_activity_by_id: int | None = None
    last_edited_at: datetime | None = None
    last_edited_by_id: int | None = None
    deletion: PostDeletion | None = None
    clear_deletion: bool = False

    def changed_fields(self) -> set[str]:
        """Names of the fields this change set writes."""
        names = {
            name
            for name in (
                "title",
                "tags",
                "body",
                "body_markdown",
                "last_activity_at",
                "last_activity_by_id",
                "last_edited_at",
                "last_edited_by_id",
            )
            if getattr(self, name) is not None
        }
        if self.deletion is not None or self.clear_deletion:
            names.add("deletion")
        return names

    def touches_content(self) -> bool:
        """True when the change rewrites title, tags or body rather than only state or attribution."""
        return bool(self.changed_fields() & CONTENT_FIELDS)


@dataclass
class Post:
    """A question or an answer.

    Answers always reference their parent question through ``parent_id``;
    ``title`` and ``tags`` are only meaningful on questions.
    """

    kind: PostKind
    user_id: int
    body_markdown: str
    body: str = ""
    id: int | None = None
    parent_id: int | None = None
    category_id: int | None = None
    title: str | None = None
    tags: list[str] = field(default_factory=list)
    locked: bool = False
    deletion: PostDeletion | None = None
    last_activity_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_activity_by_id: int | None = None
    last_edited_at: datetime | None = None
    last_edited_by_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_question(self) -> bool:
        return self.kind == PostKind.QUESTION

    @property
    def is_answer(self) -> bool:
        return self.kind == PostKind.ANSWER

    @property
    def deleted(self) -> bool:
        return self.deletion is not None

    @property
    def question_id(self) -> int | None:
        """Id of the question page this post lives on."""
        return self.id if self.is_question else self.parent_id

    def with_changes(self, changes: PostChanges) -> "Post":
        """Return a copy of this post with ``changes`` applied. Does not validate."""
        updates: dict = {}
        for name in (
            "title",
            "body",
            "body_markdown",
            "last_activity_at",
            "last_activity_by_id",
            "last_edited_at",
            "last_edited_by_id",
        ):
            value = getattr(changes, name)
            if value is not None:
                updates[name] = value
        if changes.tags is not None:
            updates["tags"] = list(changes.tags)
        if changes.clear_deletion:
            updates["deletion"] = None
        elif changes.deletion is not None:
            updates["deletion"] = changes.deletion
        return replace(self, **updates)

    def validation_errors(self) -> list[str]:
        """Collect every broken validity rule; an empty list means the post is valid."""
        errors: list[str] = []
        if self.is_answer and self.parent_id is None:
            errors.append("An answer must belong to a question.")
        if self.is_question:
            title = (self.title or "").strip()
            if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
                errors.append(
                    f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters."
                )
            tags = [t for t in self.tags if t.strip()]
            if len(tags) < MIN_TAGS:
                errors.append("Questions must have at least one tag.")
            if len(tags) > MAX_TAGS:
                errors.append(f"Questions may have at most {MAX_TAGS} tags.")
        elif self.title or self.tags:
            errors.append("Answers cannot have a title or tags.")
        length = len(self.body_markdown.strip())
        if not BODY_MIN_LENGTH <= length <= BODY_MAX_LENGTH:
            errors.append(
                f"Body must be between {BODY_MIN_LENGTH} and {BODY_MAX_LENGTH} characters."
            )
        return errors

    def validate(self) -> None:
        """Raise PostValidationError if the post breaks any validity rule."""
        errors = self.validation_errors()
        if errors:
            raise PostValidationError(errors)
