"""In-memory user repository for testing."""

from typing import Optional

from commentary.domain.model.user import User
from commentary.domain.repository.user import UserRepository
from commentary.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        """Seed a user; accounts are owned by the identity side."""
        self._users[user.id] = user
        return user
