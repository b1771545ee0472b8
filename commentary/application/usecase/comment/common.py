"""Shared response shapes and helpers for comment use cases."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from commentary.domain.model import Comment
from commentary.domain.service import CommentNode
from commentary.domain.value import Principal


class CommentItem(BaseModel):
    """Comment as returned to clients.

    The anonymous author's e-mail and the stored IP address and user
    agent are never part of this shape.
    """

    id: str
    post_id: str
    parent_id: str | None
    content: str
    author_id: str | None
    author_name: str | None
    author_url: str | None
    approved: bool
    created_at: datetime
    updated_at: datetime
    replies: list[CommentItem] = Field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment) -> CommentItem:
        return cls(
            id=str(comment.id),
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            content=comment.content,
            author_id=str(comment.author_id) if comment.author_id else None,
            author_name=comment.author_name,
            author_url=comment.author_url,
            approved=comment.approved,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    @classmethod
    def from_node(cls, node: CommentNode) -> CommentItem:
        item = cls.from_comment(node.comment)
        item.replies = [cls.from_node(reply) for reply in node.replies]
        return item


def rate_limit_identifier(principal: Principal | None, client_ip: str | None) -> str:
    """Quota key: the user when authenticated, otherwise the client address."""
    if principal is not None:
        return f"user:{principal.user_id}"
    return client_ip or "unknown"
