"""Identity resolution domain service."""

from uuid import UUID

import logfire

from commentary.domain.repository import UserRepository
from commentary.domain.value import Principal, UserId

from .base import Service
from .jwt_service import JWTService


class IdentityService(Service):
    """Resolves the request's session token into a principal.

    The role is read from the user record rather than the token, so role
    changes apply to existing sessions immediately.
    """

    def __init__(self, jwt_service: JWTService, user_repository: UserRepository) -> None:
        """Initialize identity service.

        Args:
            jwt_service: JWT service for token verification
            user_repository: User repository for role lookup
        """
        self.jwt_service = jwt_service
        self.user_repository = user_repository

    async def resolve(self, token: str | None) -> Principal | None:
        """Resolve a session token.

        Args:
            token: JWT token from cookie or Authorization header

        Returns:
            Principal for an active user, None for anonymous callers
        """
        user_id = self.jwt_service.get_user_id_from_token(token)
        if user_id is None:
            return None

        with logfire.span("identity_service.resolve", user_id=user_id):
            try:
                parsed = UserId(UUID(user_id))
            except ValueError:
                logfire.warn("Token carries malformed user id", user_id=user_id)
                return None

            user = await self.user_repository.find_by_id(parsed)
            if user is None or not user.can_authenticate:
                logfire.warn("Token user missing or inactive", user_id=user_id)
                return None

            return Principal(user_id=user.id, role=user.role)
