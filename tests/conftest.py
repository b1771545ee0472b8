"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from commentary.domain.model import Comment, Post, User
from commentary.domain.value import CommentId, PostId, UserId, UserRole


def make_post(slug: str = "hello-world", published: bool = True) -> Post:
    """Build a post with sensible defaults."""
    return Post(
        id=PostId(uuid4()),
        slug=slug,
        title=slug.replace("-", " ").title(),
        published=published,
        created_at=datetime.now(),
    )


def make_user(role: UserRole = UserRole.USER, is_active: bool = True) -> User:
    """Build a user with a unique e-mail."""
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        email=f"user-{str(user_id)[:8]}@example.com",
        name="Test User",
        role=role,
        is_active=is_active,
        created_at=datetime.now(),
    )


def make_comment(
    post: Post,
    content: str = "A comment",
    parent: Comment | None = None,
    author: User | None = None,
    approved: bool = True,
    minutes_ago: int = 0,
    deleted: bool = False,
) -> Comment:
    """Build a comment; anonymous unless ``author`` is given.

    ``minutes_ago`` spaces out ``created_at`` so ordering is deterministic.
    """
    created_at = datetime.now() - timedelta(minutes=minutes_ago)
    return Comment(
        id=CommentId(uuid4()),
        post_id=post.id,
        content=content,
        parent_id=parent.id if parent else None,
        author_id=author.id if author else None,
        author_name=None if author else "Ada",
        author_email=None if author else "ada@example.com",
        approved=approved,
        ip_address="203.0.113.7",
        user_agent="pytest",
        created_at=created_at,
        updated_at=created_at,
        deleted_at=datetime.now() if deleted else None,
    )
