"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from commentary.domain.value.common import ValueObject
from commentary.domain.value.identifiers import UserId


class UserRole(str, Enum):
    """User roles, ordered from least to most privileged."""

    USER = "USER"
    AUTHOR = "AUTHOR"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    def at_least(self, other: "UserRole") -> bool:
        """Whether this role is at least as privileged as ``other``."""
        return self.rank >= other.rank

    @property
    def is_moderator(self) -> bool:
        """Moderator-class roles may see and moderate unapproved comments."""
        return self.at_least(UserRole.ADMIN)


_ROLE_RANKS = {
    UserRole.USER: 0,
    UserRole.AUTHOR: 1,
    UserRole.ADMIN: 2,
    UserRole.SUPER_ADMIN: 3,
}


class Principal(ValueObject):
    """An authenticated identity resolved for the current request."""

    user_id: UserId
    role: UserRole

    @property
    def is_moderator(self) -> bool:
        return self.role.is_moderator


class ModerationAction(str, Enum):
    """Batch moderation actions."""

    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"


class ActivityAction(str, Enum):
    """Audit actions recorded in the activity log."""

    CREATE_COMMENT = "CREATE_COMMENT"
    UPDATE_COMMENT = "UPDATE_COMMENT"
    APPROVE_COMMENT = "APPROVE_COMMENT"
    REJECT_COMMENT = "REJECT_COMMENT"
    DELETE_COMMENT = "DELETE_COMMENT"
    MODERATE_COMMENTS = "MODERATE_COMMENTS"


class ResourceType(str, Enum):
    """Audited resource kinds."""

    COMMENT = "COMMENT"


class RateLimitBucket(str, Enum):
    """Operation classes with their own quota."""

    COMMENTS_READ = "COMMENTS_READ"
    COMMENTS_CREATE = "COMMENTS_CREATE"
    COMMENTS_UPDATE = "COMMENTS_UPDATE"
    COMMENTS_MODERATE = "COMMENTS_MODERATE"
