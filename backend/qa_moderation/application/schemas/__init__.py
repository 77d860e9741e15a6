from .action import ActionResponse
from .post import PostResponse, PostHistoryResponse, CommentResponse
from .suggested_edit import SuggestedEditCreate, EditDecision, SuggestedEditResponse
from .answer import AnswerCreate, AnswerUpdate, ConvertToCommentRequest
from .audit_log import AuditRecordResponse
from .notification import NotificationResponse

__all__ = [
    "ActionResponse",
    "PostResponse",
    "PostHistoryResponse",
    "CommentResponse",
    "SuggestedEditCreate",
    "EditDecision",
    "SuggestedEditResponse",
    "AnswerCreate",
    "AnswerUpdate",
    "ConvertToCommentRequest",
    "AuditRecordResponse",
    "NotificationResponse",
]
