"""User entity, used only for authorization decisions."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import UserId, UserRole


class User(DomainModel):
    """Registered user."""

    id: UserId
    email: str = Field(max_length=255)
    name: Optional[str] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def can_authenticate(self) -> bool:
        return self.is_active and self.deleted_at is None
