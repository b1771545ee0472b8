"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from commentary.domain.model import ActivityLog, Comment, Post, User
from commentary.domain.value import CommentId, PostId, UserId, UserRole


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        parent_id=CommentId(row["parent_id"]) if row["parent_id"] else None,
        author_id=UserId(row["author_id"]) if row["author_id"] else None,
        author_name=row["author_name"],
        author_email=row["author_email"],
        author_url=row["author_url"],
        content=row["content"],
        approved=row["approved"],
        ip_address=row["ip_address"],
        user_agent=row["user_agent"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row["deleted_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "author_id": comment.author_id,
        "author_name": comment.author_name,
        "author_email": comment.author_email,
        "author_url": comment.author_url,
        "content": comment.content,
        "approved": comment.approved,
        "ip_address": comment.ip_address,
        "user_agent": comment.user_agent,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
        "deleted_at": comment.deleted_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(row["id"]),
        slug=row["slug"],
        title=row["title"],
        published=row["published"],
        created_at=row["created_at"],
        deleted_at=row["deleted_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return {
        "id": post.id,
        "slug": post.slug,
        "title": post.title,
        "published": post.published,
        "created_at": post.created_at,
        "deleted_at": post.deleted_at,
    }


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        email=row["email"],
        name=row["name"],
        role=UserRole(row["role"]),
        is_active=row["is_active"],
        created_at=row["created_at"],
        deleted_at=row["deleted_at"],
    )


def activity_log_to_dict(entry: ActivityLog) -> Dict[str, Any]:
    """Convert ActivityLog domain model to database dict."""
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "action": entry.action.value,
        "resource": entry.resource.value,
        "resource_id": entry.resource_id,
        "details": entry.details,
        "created_at": entry.created_at,
    }
