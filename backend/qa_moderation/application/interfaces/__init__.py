from .user_repository import UserRepository, CategoryRepository
from .post_repository import PostRepository
from .suggested_edit_repository import SuggestedEditRepository
from .post_history_repository import PostHistoryRepository
from .audit_log_repository import AuditLogRepository
from .comment_repository import CommentRepository
from .notification_repository import NotificationRepository
from .notifier import Notifier
from .authorization import AuthorizationPolicy
from .markdown_renderer import MarkdownRenderer
from .transaction import Transaction

__all__ = [
    "UserRepository",
    "CategoryRepository",
    "PostRepository",
    "SuggestedEditRepository",
    "PostHistoryRepository",
    "AuditLogRepository",
    "CommentRepository",
    "NotificationRepository",
    "Notifier",
    "AuthorizationPolicy",
    "MarkdownRenderer",
    "Transaction",
]
