"""Query value objects for comment listings."""

import math
from enum import Enum
from typing import Optional

from pydantic import Field

from commentary.domain.value.common import ValueObject
from commentary.domain.value.identifiers import PostId, UserId


class CommentSortField(str, Enum):
    """Sortable comment columns."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class CommentFilter(ValueObject):
    """Filter for top-level comment listings.

    ``approved`` is tri-state: True (approved only), False (pending only),
    None (both). Soft-deleted rows are always excluded.
    """

    post_id: PostId
    approved: Optional[bool] = True
    author_id: Optional[UserId] = None
    top_level_only: bool = True
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    sort_by: CommentSortField = CommentSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.ASC
    include_replies: bool = True
    max_depth: int = Field(default=3, ge=1, le=5)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit


class Pagination(ValueObject):
    """Pagination envelope for a listing page."""

    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
            has_next=page * limit < total,
            has_prev=page > 1,
        )
