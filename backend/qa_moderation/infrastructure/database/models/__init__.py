from .user import UserModel, CategoryModel
from .post import PostModel
from .suggested_edit import SuggestedEditModel
from .comment import CommentModel
from .post_history import PostHistoryModel
from .audit_log import AuditLogModel
from .notification import NotificationModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "PostModel",
    "SuggestedEditModel",
    "CommentModel",
    "PostHistoryModel",
    "AuditLogModel",
    "NotificationModel",
]
