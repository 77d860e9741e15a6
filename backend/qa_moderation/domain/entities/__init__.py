from .user import User, Category
from .post import Post, PostKind, PostDeletion, PostChanges
from .suggested_edit import SuggestedEdit, SuggestedEditState, ProposedFields
from .audit_record import AuditRecord, AuditLogType
from .post_history import PostHistoryEntry, PostHistoryType
from .comment import Comment, COMMENT_MAX_LENGTH
from .notification import Notification

__all__ = [
    "User",
    "Category",
    "Post",
    "PostKind",
    "PostDeletion",
    "PostChanges",
    "SuggestedEdit",
    "SuggestedEditState",
    "ProposedFields",
    "AuditRecord",
    "AuditLogType",
    "PostHistoryEntry",
    "PostHistoryType",
    "Comment",
    "COMMENT_MAX_LENGTH",
    "Notification",
]
