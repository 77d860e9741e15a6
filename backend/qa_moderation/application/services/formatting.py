"""Link and text helpers shared by the moderation services."""

from qa_moderation.domain.entities import Post


def question_url(question_id: int) -> str:
    return f"/questions/{question_id}"


def post_url(post: Post) -> str:
    """Location of a post: the question page, or the answer scoped to its question."""
    if post.is_question:
        return question_url(post.id)
    return f"/questions/{post.parent_id}/answers/{post.id}"


def truncate(text: str | None, length: int = 50, omission: str = "...") -> str:
    """Shorten ``text`` to at most ``length`` characters, ending with ``omission``."""
    text = text or ""
    if len(text) <= length:
        return text
    return text[: max(length - len(omission), 0)] + omission
