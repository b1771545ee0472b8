"""Validation layer for comment input.

Each validator takes raw, untrusted values and returns a
``ValidationResult``: either the normalized value or the full list of
violated fields. Callers that cannot proceed on failure use
``unwrap()``, which raises ``ValidationError``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, cast
from uuid import UUID

import pydantic
from pydantic import EmailStr, HttpUrl, TypeAdapter

from commentary.domain.error import FieldError, ValidationError
from commentary.domain.value import (
    CommentFilter,
    CommentId,
    CommentSortField,
    ModerationAction,
    PostId,
    Principal,
    SortOrder,
    UserId,
)
from commentary.domain.value.common import ValueObject

T = TypeVar("T")

CONTENT_MAX_LENGTH = 1000
AUTHOR_NAME_MAX_LENGTH = 50
AUTHOR_EMAIL_MAX_LENGTH = 255
AUTHOR_URL_MAX_LENGTH = 200
REASON_MAX_LENGTH = 500
MAX_PAGE_SIZE = 100
MAX_THREAD_DEPTH = 5
MAX_BATCH_SIZE = 100
# Largest row offset the store accepts (signed 64-bit)
MAX_OFFSET = 2**63 - 1

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(HttpUrl)


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Either a normalized value or the violated fields."""

    value: Optional[T] = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the value or raise ``ValidationError`` with every field."""
        if self.errors:
            raise ValidationError(self.errors)
        return cast(T, self.value)


class NewComment(ValueObject):
    """Normalized comment-creation record."""

    post_id: PostId
    content: str
    parent_id: Optional[CommentId] = None
    author_id: Optional[UserId] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    author_url: Optional[str] = None
    approved: bool


class CommentPatch(ValueObject):
    """Normalized partial update; at least one field is set."""

    content: Optional[str] = None
    approved: Optional[bool] = None


class ModerationCommand(ValueObject):
    """Normalized batch moderation request."""

    comment_ids: list[CommentId]
    action: ModerationAction
    reason: Optional[str] = None


class _Errors:
    """Collects field errors while a validator runs."""

    def __init__(self) -> None:
        self.items: list[FieldError] = []

    def add(self, field_name: str, message: str) -> None:
        self.items.append(FieldError(field=field_name, message=message))


def _content(
    value: Any, errors: _Errors, field_name: str = "content"
) -> Optional[str]:
    if value is None:
        errors.add(field_name, "Comment content is required")
        return None
    if not isinstance(value, str):
        errors.add(field_name, "Comment content must be a string")
        return None
    content = value.strip()
    if not content:
        errors.add(field_name, "Comment content is required")
        return None
    if len(content) > CONTENT_MAX_LENGTH:
        errors.add(
            field_name,
            f"Comment must be at most {CONTENT_MAX_LENGTH} characters",
        )
        return None
    return content


def _uuid(
    value: Any, field_name: str, errors: _Errors, label: str = "ID"
) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        errors.add(field_name, f"Invalid {label}")
        return None


def _author_name(value: Any, errors: _Errors) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        errors.add("author_name", "Name is required for anonymous comments")
        return None
    if not isinstance(value, str):
        errors.add("author_name", "Name must be a string")
        return None
    name = value.strip()
    if len(name) > AUTHOR_NAME_MAX_LENGTH:
        errors.add(
            "author_name",
            f"Name must be at most {AUTHOR_NAME_MAX_LENGTH} characters",
        )
        return None
    return name


def _author_email(value: Any, errors: _Errors) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        errors.add("author_email", "Email is required for anonymous comments")
        return None
    if not isinstance(value, str):
        errors.add("author_email", "Email must be a string")
        return None
    email = value.strip().lower()
    if len(email) > AUTHOR_EMAIL_MAX_LENGTH:
        errors.add(
            "author_email",
            f"Email must be at most {AUTHOR_EMAIL_MAX_LENGTH} characters",
        )
        return None
    try:
        _email_adapter.validate_python(email)
    except pydantic.ValidationError:
        errors.add("author_email", "Invalid email address")
        return None
    return email


def _author_url(value: Any, errors: _Errors) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not isinstance(value, str):
        errors.add("author_url", "Website URL must be a string")
        return None
    url = value.strip()
    if len(url) > AUTHOR_URL_MAX_LENGTH:
        errors.add(
            "author_url",
            f"Website URL must be at most {AUTHOR_URL_MAX_LENGTH} characters",
        )
        return None
    try:
        _url_adapter.validate_python(url)
    except pydantic.ValidationError:
        errors.add("author_url", "Invalid website URL")
        return None
    return url


def validate_comment_id(
    value: Any, field_name: str = "comment_id"
) -> ValidationResult[CommentId]:
    """Validate a comment identifier taken from a path or body."""
    errors = _Errors()
    parsed = _uuid(value, field_name, errors, "comment ID")
    if parsed is None:
        return ValidationResult(errors=errors.items)
    return ValidationResult(value=CommentId(parsed))


def validate_new_comment(
    post_id: PostId,
    principal: Optional[Principal],
    content: Any,
    parent_id: Any = None,
    author_name: Any = None,
    author_email: Any = None,
    author_url: Any = None,
) -> ValidationResult[NewComment]:
    """Validate and normalize a comment-creation request.

    Registered authors are auto-approved and their anonymous fields are
    discarded. Anonymous authors must supply both a name and an e-mail;
    each missing one is reported separately.
    """
    errors = _Errors()

    normalized_content = _content(content, errors)
    normalized_parent = None
    if parent_id is not None:
        normalized_parent = _uuid(parent_id, "parent_id", errors, "parent comment ID")
    normalized_url = _author_url(author_url, errors)

    name: Optional[str] = None
    email: Optional[str] = None
    if principal is None:
        name = _author_name(author_name, errors)
        email = _author_email(author_email, errors)

    if errors.items:
        return ValidationResult(errors=errors.items)

    return ValidationResult(
        value=NewComment(
            post_id=post_id,
            content=normalized_content,
            parent_id=CommentId(normalized_parent) if normalized_parent else None,
            author_id=principal.user_id if principal else None,
            author_name=name,
            author_email=email,
            author_url=normalized_url,
            approved=principal is not None,
        )
    )


def _int_param(
    params: Mapping[str, str],
    name: str,
    default: int,
    minimum: int,
    maximum: Optional[int],
    errors: _Errors,
) -> int:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        errors.add(name, f"{name} must be an integer")
        return default
    if value < minimum:
        errors.add(name, f"{name} must be at least {minimum}")
        return default
    if maximum is not None:
        # Oversized values are clamped rather than rejected
        value = min(value, maximum)
    return value


def _bool_param(
    params: Mapping[str, str], name: str, default: bool, errors: _Errors
) -> bool:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    lowered = raw.lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    errors.add(name, f"{name} must be true or false")
    return default


def _approved_param(params: Mapping[str, str], errors: _Errors) -> Optional[bool]:
    raw = params.get("approved")
    if raw is None or raw == "":
        return True
    lowered = raw.lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    if lowered == "all":
        return None
    errors.add("approved", "approved must be true, false or all")
    return True


def validate_comment_filter(
    post_id: PostId,
    params: Mapping[str, str],
    principal: Optional[Principal] = None,
) -> ValidationResult[CommentFilter]:
    """Validate listing query parameters.

    Callers without a moderator role are always restricted to approved
    comments, whatever ``approved`` value they send.
    """
    errors = _Errors()

    page = _int_param(params, "page", 1, 1, None, errors)
    limit = _int_param(params, "limit", 20, 1, MAX_PAGE_SIZE, errors)
    if (page - 1) * limit > MAX_OFFSET:
        errors.add("page", "page is out of range")
    max_depth = _int_param(params, "max_depth", 3, 1, MAX_THREAD_DEPTH, errors)
    include_replies = _bool_param(params, "include_replies", True, errors)
    approved = _approved_param(params, errors)

    sort_by = CommentSortField.CREATED_AT
    if params.get("sort_by"):
        try:
            sort_by = CommentSortField(params["sort_by"])
        except ValueError:
            errors.add("sort_by", "sort_by must be created_at or updated_at")

    sort_order = SortOrder.ASC
    if params.get("sort_order"):
        try:
            sort_order = SortOrder(params["sort_order"].lower())
        except ValueError:
            errors.add("sort_order", "sort_order must be asc or desc")

    author_id: Optional[UUID] = None
    if params.get("author_id"):
        author_id = _uuid(params["author_id"], "author_id", errors, "author ID")

    if errors.items:
        return ValidationResult(errors=errors.items)

    if principal is None or not principal.is_moderator:
        approved = True

    return ValidationResult(
        value=CommentFilter(
            post_id=post_id,
            approved=approved,
            author_id=UserId(author_id) if author_id else None,
            top_level_only=True,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
            include_replies=include_replies,
            max_depth=max_depth,
        )
    )


def validate_comment_update(
    content: Any = None, approved: Any = None
) -> ValidationResult[CommentPatch]:
    """Validate a moderator edit restricted to content and approval."""
    errors = _Errors()

    if content is None and approved is None:
        errors.add("content", "Provide content or approved")
        return ValidationResult(errors=errors.items)

    normalized_content = _content(content, errors) if content is not None else None
    if approved is not None and not isinstance(approved, bool):
        errors.add("approved", "approved must be a boolean")

    if errors.items:
        return ValidationResult(errors=errors.items)

    return ValidationResult(
        value=CommentPatch(content=normalized_content, approved=approved)
    )


def validate_moderation(
    comment_ids: Any, action: Any, reason: Any = None
) -> ValidationResult[ModerationCommand]:
    """Validate a batch moderation request (1-100 ids)."""
    errors = _Errors()

    ids: list[CommentId] = []
    if not isinstance(comment_ids, list) or not comment_ids:
        errors.add("comment_ids", "At least one comment ID required")
    elif len(comment_ids) > MAX_BATCH_SIZE:
        errors.add("comment_ids", f"At most {MAX_BATCH_SIZE} comment IDs per request")
    else:
        for index, raw in enumerate(comment_ids):
            parsed = _uuid(raw, f"comment_ids.{index}", errors, "comment ID")
            if parsed is not None and parsed not in ids:
                ids.append(CommentId(parsed))

    parsed_action: Optional[ModerationAction] = None
    try:
        parsed_action = ModerationAction(action)
    except ValueError:
        errors.add("action", "Action must be approve, reject, or delete")

    normalized_reason: Optional[str] = None
    if reason is not None:
        if not isinstance(reason, str):
            errors.add("reason", "Reason must be a string")
        elif len(reason) > REASON_MAX_LENGTH:
            errors.add(
                "reason", f"Reason must be at most {REASON_MAX_LENGTH} characters"
            )
        else:
            normalized_reason = reason.strip() or None

    if errors.items:
        return ValidationResult(errors=errors.items)

    return ValidationResult(
        value=ModerationCommand(
            comment_ids=ids, action=parsed_action, reason=normalized_reason
        )
    )
