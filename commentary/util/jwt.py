"""Session token helpers.

Tokens only identify the user. Roles are looked up on every request, so
a token never grants moderation rights by itself.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from commentary.config import AuthSettings

_REQUIRED_CLAIMS = ["user_id", "exp", "iat"]


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    user_id: str
    exp: datetime
    iat: datetime


class JWTError(Exception):
    """Token is malformed, forged or expired."""


def create_token(
    user_id: str, settings: AuthSettings, now: datetime | None = None
) -> str:
    """Issue a session token valid for ``settings.jwt_expiry_days``."""
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode a session token.

    Raises:
        JWTError: If the signature, the claims or the expiry do not check out
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": _REQUIRED_CLAIMS},
        )
        return TokenPayload(**claims)
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except (jwt.InvalidTokenError, ValueError) as e:
        raise JWTError("Invalid token") from e
