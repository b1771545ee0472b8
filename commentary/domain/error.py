"""Domain layer errors."""

from dataclasses import dataclass


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"


@dataclass(frozen=True)
class FieldError:
    """A single violated input field."""

    field: str
    message: str


class ValidationError(DomainError):
    """Raised when input is malformed or out of range.

    Carries every violated field, not just the first one.
    """

    code = "validation_error"

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        fields = ", ".join(e.field for e in errors)
        super().__init__(f"Invalid input: {fields}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found or is hidden."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthorizedError(DomainError):
    """Raised when an operation requires an authenticated identity."""

    code = "unauthorized"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when the identity lacks the required role."""

    code = "forbidden"

    def __init__(self, action: str, user_id: str):
        self.action = action
        super().__init__(f"User {user_id} is not allowed to {action}")


class RateLimitedError(DomainError):
    """Raised when a quota is exhausted."""

    code = "rate_limited"

    def __init__(self, bucket: str, retry_after: int):
        self.bucket = bucket
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded. Try again in {retry_after} seconds."
        )


class ConflictError(DomainError):
    """Raised on uniqueness violations."""

    code = "conflict"


class InternalError(DomainError):
    """Raised when the store or a collaborator fails."""

    code = "internal_error"
