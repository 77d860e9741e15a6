"""Capability checks driven by the privileges granted to each user."""

from qa_moderation.application.interfaces import AuthorizationPolicy
from qa_moderation.domain.capabilities import EDIT_POSTS, MODERATOR
from qa_moderation.domain.entities import Post, User


class PrivilegePolicy(AuthorizationPolicy):
    """Moderators and admins hold every capability; authors may always edit their own posts.

    Everyone else holds exactly the capabilities listed in ``User.privileges``,
    which are computed and granted outside this service.
    """

    def has_capability(self, user: User, capability: str, target: Post | None = None) -> bool:
        if user.has_moderator_standing:
            return True
        if capability == MODERATOR:
            return False
        if capability == EDIT_POSTS and target is not None and target.user_id == user.id:
            return True
        return capability in user.privileges
