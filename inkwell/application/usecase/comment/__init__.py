"""Comment use cases."""

from .bulk_action import BulkActionRequest, BulkActionResponse, BulkActionUseCase
from .comment_stats import (
    CommentStatsRequest,
    CommentStatsResponse,
    CommentStatsUseCase,
)
from .common import AuthorView, CommentItem, PaginationInfo
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .list_comments_admin import (
    ListCommentsAdminRequest,
    ListCommentsAdminResponse,
    ListCommentsAdminUseCase,
)
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from .reply_comment import ReplyCommentRequest, ReplyCommentResponse, ReplyCommentUseCase

__all__ = [
    "AuthorView",
    "BulkActionRequest",
    "BulkActionResponse",
    "BulkActionUseCase",
    "CommentItem",
    "CommentStatsRequest",
    "CommentStatsResponse",
    "CommentStatsUseCase",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "ListCommentsAdminRequest",
    "ListCommentsAdminResponse",
    "ListCommentsAdminUseCase",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
    "PaginationInfo",
    "ReplyCommentRequest",
    "ReplyCommentResponse",
    "ReplyCommentUseCase",
]
