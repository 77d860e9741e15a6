from .audit_log_service import AuditLogService
from .suggested_edit_service import SuggestedEditService
from .answer_service import AnswerService
from .post_service import PostService
from .notification_service import NotificationService

__all__ = [
    "AuditLogService",
    "SuggestedEditService",
    "AnswerService",
    "PostService",
    "NotificationService",
]
