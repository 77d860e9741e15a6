from .user_repository import SQLAlchemyUserRepository, SQLAlchemyCategoryRepository
from .post_repository import SQLAlchemyPostRepository
from .suggested_edit_repository import SQLAlchemySuggestedEditRepository
from .post_history_repository import SQLAlchemyPostHistoryRepository
from .audit_log_repository import SQLAlchemyAuditLogRepository
from .comment_repository import SQLAlchemyCommentRepository
from .notification_repository import SQLAlchemyNotificationRepository
from .transaction import SQLAlchemyTransaction

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyPostRepository",
    "SQLAlchemySuggestedEditRepository",
    "SQLAlchemyPostHistoryRepository",
    "SQLAlchemyAuditLogRepository",
    "SQLAlchemyCommentRepository",
    "SQLAlchemyNotificationRepository",
    "SQLAlchemyTransaction",
]
