"""Comment use cases."""

from .common import CommentItem
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .get_comment import GetCommentRequest, GetCommentUseCase
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .moderate_comments import (
    ModerateCommentsRequest,
    ModerateCommentsResponse,
    ModerateCommentsUseCase,
)
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "GetCommentRequest",
    "GetCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "ModerateCommentsRequest",
    "ModerateCommentsResponse",
    "ModerateCommentsUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]
