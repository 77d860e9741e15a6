"""Pure functions that turn a proposed edit into the field set written to a post."""

from datetime import datetime

from qa_moderation.domain.entities.post import Post, PostChanges
from qa_moderation.domain.entities.suggested_edit import ProposedFields


def clean_tags(tags: list[str] | None) -> list[str] | None:
    """Drop blank tag entries; ``None`` stays ``None``."""
    if tags is None:
        return None
    return [tag.strip() for tag in tags if tag and tag.strip()]


def merge_non_null(
    post: Post,
    proposed: ProposedFields,
    *,
    activity_at: datetime,
    activity_by_id: int,
) -> PostChanges:
    """Fields to write when a proposed edit is accepted.

    Questions take title, tags, body and body_markdown; answers take body and
    body_markdown only. Fields the edit left as ``None`` are not written. The
    two activity fields are always set.
    """
    if post.is_question:
        return PostChanges(
            title=proposed.title,
            tags=clean_tags(proposed.tags),
            body=proposed.body,
            body_markdown=proposed.body_markdown,
            last_activity_at=activity_at,
            last_activity_by_id=activity_by_id,
        )
    return PostChanges(
        body=proposed.body,
        body_markdown=proposed.body_markdown,
        last_activity_at=activity_at,
        last_activity_by_id=activity_by_id,
    )


def drop_unchanged(post: Post, proposed: ProposedFields) -> ProposedFields:
    """Keep only the proposed fields that differ from the post's current content."""
    title = proposed.title if proposed.title is not None and proposed.title != post.title else None
    tags = clean_tags(proposed.tags)
    if tags is not None and tags == post.tags:
        tags = None
    body_markdown = proposed.body_markdown
    if body_markdown is not None and body_markdown == post.body_markdown:
        body_markdown = None
    return ProposedFields(
        title=title,
        tags=tags,
        body=proposed.body if body_markdown is not None else None,
        body_markdown=body_markdown,
    )


def split_into_chunks(text: str, chunk_size: int) -> list[str]:
    """Split ``text`` into consecutive pieces of at most ``chunk_size`` characters.

    Yields ``ceil(len(text) / chunk_size)`` pieces; joining them restores ``text``.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]
