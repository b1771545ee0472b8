"""Comment entity.

Comments are attached to a post and may reply to another comment on the
same post. Authorship is either a registered user or an anonymous
name/e-mail pair, and an approval flag gates public visibility.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through ``parent_id`` (None for top-level). The
    store imposes no depth limit; readers bound how deep they assemble.

    Provenance (``ip_address``, ``user_agent``) and the anonymous e-mail
    are stored but never exposed by public reads.
    """

    id: CommentId
    post_id: PostId
    content: str = Field(min_length=1, max_length=1000)
    parent_id: Optional[CommentId] = None
    author_id: Optional[UserId] = None
    author_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    author_email: Optional[str] = Field(default=None, max_length=255)
    author_url: Optional[str] = Field(default=None, max_length=200)
    approved: bool = False
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_authorship(self) -> "Comment":
        """Exactly one authorship mode: registered or anonymous."""
        registered = self.author_id is not None
        anonymous = self.author_name is not None and self.author_email is not None
        if registered and (self.author_name or self.author_email):
            raise ValueError("Registered comments cannot carry anonymous author fields")
        if not registered and not anonymous:
            raise ValueError(
                "Anonymous comments require both author_name and author_email"
            )
        return self

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_public(self) -> bool:
        """Visible to callers without a moderator role."""
        return self.approved and not self.is_deleted
