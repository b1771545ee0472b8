"""Post entity.

Posts are owned by the publishing side of the site; the comment engine
only reads them to resolve slugs and check visibility.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import PostId


class Post(DomainModel):
    """Post entity (read-only from the comment engine's perspective)."""

    id: PostId
    slug: str = Field(min_length=1, max_length=200)
    title: str = Field(min_length=1, max_length=300)
    published: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None
