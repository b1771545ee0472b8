"""Comment routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from commentary.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetCommentUseCase,
    ModerateCommentsRequest,
    ModerateCommentsResponse,
    ModerateCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from commentary.config import AuthSettings

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def client_ip(request: Request) -> str | None:
    """Best-effort client address: proxy headers first, then the peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client:
        return request.client.host
    return None


def auth_token(request: Request, auth_settings: AuthSettings) -> str | None:
    """Session token from the auth cookie or an ``Authorization: Bearer`` header."""
    token = request.cookies.get(auth_settings.cookie_name)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str | None = None
    parent_id: str | None = None  # Parent comment ID for replies
    author_name: str | None = None
    author_email: str | None = None
    author_url: str | None = None


class UpdateCommentAPIRequest(BaseModel):
    """API request for a moderator edit."""

    content: Any = None
    approved: Any = None


class ModerateCommentsAPIRequest(BaseModel):
    """API request for batch moderation."""

    comment_ids: Any = None
    action: Any = None
    reason: Any = None


@router.get("/posts/{slug}/comments", response_model=GetCommentsResponse)
async def get_comments(
    slug: str,
    request: Request,
    response: Response,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> GetCommentsResponse:
    """List top-level comments for a post with their reply trees.

    Query parameters: page, limit, sort_by, sort_order, approved,
    author_id, include_replies, max_depth. Only moderators can list
    pending comments.
    """
    result = await get_comments_use_case.execute(
        GetCommentsRequest(
            post_slug=slug,
            query=dict(request.query_params),
            auth_token=auth_token(request, auth_settings),
            client_ip=client_ip(request),
        )
    )
    response.headers["Cache-Control"] = result.cache_control
    return result


@router.post(
    "/posts/{slug}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    slug: str,
    body: CreateCommentAPIRequest,
    request: Request,
    response: Response,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> CommentItem:
    """Create a comment on a post or reply to another comment.

    Anonymous callers must provide author_name and author_email; their
    comments wait for moderation. Authenticated comments are approved
    immediately.
    """
    result = await create_comment_use_case.execute(
        CreateCommentRequest(
            post_slug=slug,
            content=body.content,
            parent_id=body.parent_id,
            author_name=body.author_name,
            author_email=body.author_email,
            author_url=body.author_url,
            auth_token=auth_token(request, auth_settings),
            client_ip=client_ip(request),
            user_agent=request.headers.get("user-agent"),
        )
    )
    response.headers["Location"] = result.location
    return result.comment


@router.post("/comments/moderate", response_model=ModerateCommentsResponse)
async def moderate_comments(
    body: ModerateCommentsAPIRequest,
    request: Request,
    moderate_comments_use_case: FromDishka[ModerateCommentsUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> ModerateCommentsResponse:
    """Approve, reject or delete up to 100 comments.

    Each ID succeeds or fails on its own; see ``results``.
    """
    return await moderate_comments_use_case.execute(
        ModerateCommentsRequest(
            comment_ids=body.comment_ids,
            action=body.action,
            reason=body.reason,
            auth_token=auth_token(request, auth_settings),
            client_ip=client_ip(request),
        )
    )


@router.get("/comments/{comment_id}", response_model=CommentItem)
async def get_comment(
    comment_id: str,
    request: Request,
    get_comment_use_case: FromDishka[GetCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> CommentItem:
    """Get a single comment."""
    return await get_comment_use_case.execute(
        GetCommentRequest(
            comment_id=comment_id,
            auth_token=auth_token(request, auth_settings),
            client_ip=client_ip(request),
        )
    )


@router.patch("/comments/{comment_id}", response_model=CommentItem)
async def update_comment(
    comment_id: str,
    body: UpdateCommentAPIRequest,
    request: Request,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> CommentItem:
    """Edit a comment's content and/or approval. Moderators only."""
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id,
            content=body.content,
            approved=body.approved,
            auth_token=auth_token(request, auth_settings),
            client_ip=client_ip(request),
        )
    )
