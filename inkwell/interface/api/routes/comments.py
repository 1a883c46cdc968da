"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status

from inkwell.application.usecase.base import WireModel
from inkwell.application.usecase.comment import (
    BulkActionRequest,
    BulkActionResponse,
    BulkActionUseCase,
    CommentStatsRequest,
    CommentStatsResponse,
    CommentStatsUseCase,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    ListCommentsAdminRequest,
    ListCommentsAdminResponse,
    ListCommentsAdminUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
    ReplyCommentRequest,
    ReplyCommentResponse,
    ReplyCommentUseCase,
)
from inkwell.interface.api.dependencies import bearer_token, client_address, user_agent

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(WireModel):
    """API request for creating a comment.

    Registered callers send only ``content`` and ``postId``.
    """

    content: str
    post_id: str
    author_name: str | None = None
    author_email: str | None = None
    author_website: str | None = None
    captcha_token: str | None = None
    captcha_session_id: str | None = None
    captcha_text: str | None = None
    test_bypass_token: str | None = None


class ReplyAPIRequest(WireModel):
    content: str


class StatusAPIRequest(WireModel):
    status: str


class BulkActionAPIRequest(WireModel):
    comment_ids: list[str] = []
    action: str


@router.get("/post/{post_id}", response_model=GetCommentsResponse)
async def get_comments(
    post_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    status_filter: str | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    auth_token: str | None = Depends(bearer_token),
) -> GetCommentsResponse:
    """Get the comments of a post.

    Visitors get the approved thread tree. Moderators may pass ``status``
    to see one status as a tree, or ``all`` for a flat list of everything.
    """
    request = GetCommentsRequest(
        post_id=post_id,
        auth_token=auth_token,
        status=status_filter,
        page=page,
        limit=limit,
    )
    return await get_comments_use_case.execute(request)


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    auth_token: str | None = Depends(bearer_token),
    ip_address: str | None = Depends(client_address),
    agent: str | None = Depends(user_agent),
) -> CreateCommentResponse:
    """Post a root comment.

    Authentication is optional. Anonymous comments need guest details and
    a CAPTCHA answer, and wait for moderation.
    """
    use_case_request = CreateCommentRequest(
        **request.model_dump(),
        auth_token=auth_token,
        ip_address=ip_address,
        user_agent=agent,
    )
    return await create_comment_use_case.execute(use_case_request)


@router.post(
    "/reply/{comment_id}",
    response_model=ReplyCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_comment(
    comment_id: str,
    request: ReplyAPIRequest,
    reply_comment_use_case: FromDishka[ReplyCommentUseCase],
    auth_token: str | None = Depends(bearer_token),
    ip_address: str | None = Depends(client_address),
    agent: str | None = Depends(user_agent),
) -> ReplyCommentResponse:
    """Reply to a comment. Requires the reply privilege."""
    use_case_request = ReplyCommentRequest(
        comment_id=comment_id,
        content=request.content,
        auth_token=auth_token,
        ip_address=ip_address,
        user_agent=agent,
    )
    return await reply_comment_use_case.execute(use_case_request)


@router.get("/admin/all", response_model=ListCommentsAdminResponse)
async def list_all_comments(
    list_use_case: FromDishka[ListCommentsAdminUseCase],
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None),
    post_id: str | None = Query(default=None, alias="postId"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    auth_token: str | None = Depends(bearer_token),
) -> ListCommentsAdminResponse:
    """Moderation queue across all posts. Requires the moderation privilege."""
    request = ListCommentsAdminRequest(
        auth_token=auth_token,
        post_id=post_id,
        status=status_filter,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return await list_use_case.execute(request)


@router.get("/admin/stats", response_model=CommentStatsResponse)
async def comment_stats(
    stats_use_case: FromDishka[CommentStatsUseCase],
    auth_token: str | None = Depends(bearer_token),
) -> CommentStatsResponse:
    """Comment counters for the moderation dashboard."""
    return await stats_use_case.execute(CommentStatsRequest(auth_token=auth_token))


@router.patch(
    "/admin/bulk-action",
    response_model=BulkActionResponse,
    response_model_exclude_none=True,
)
async def bulk_action(
    request: BulkActionAPIRequest,
    bulk_action_use_case: FromDishka[BulkActionUseCase],
    auth_token: str | None = Depends(bearer_token),
) -> BulkActionResponse:
    """Approve, reject, flag or delete many comments at once."""
    use_case_request = BulkActionRequest(
        comment_ids=request.comment_ids,
        action=request.action,
        auth_token=auth_token,
    )
    return await bulk_action_use_case.execute(use_case_request)


@router.patch("/{comment_id}/status", response_model=ModerateCommentResponse)
async def moderate_comment(
    comment_id: str,
    request: StatusAPIRequest,
    moderate_use_case: FromDishka[ModerateCommentUseCase],
    auth_token: str | None = Depends(bearer_token),
) -> ModerateCommentResponse:
    """Set a comment's status to approved, rejected or spam."""
    use_case_request = ModerateCommentRequest(
        comment_id=comment_id,
        status=request.status,
        auth_token=auth_token,
    )
    return await moderate_use_case.execute(use_case_request)


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_use_case: FromDishka[DeleteCommentUseCase],
    auth_token: str | None = Depends(bearer_token),
) -> DeleteCommentResponse:
    """Delete a comment and all of its replies."""
    request = DeleteCommentRequest(comment_id=comment_id, auth_token=auth_token)
    return await delete_use_case.execute(request)
