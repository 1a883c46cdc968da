"""Moderation listing use case."""

import logfire
from pydantic.alias_generators import to_snake

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.config import CommentSettings
from inkwell.domain.error import ValidationError
from inkwell.domain.repository import CommentFilter
from inkwell.domain.service import (
    AuthorizationService,
    CommentService,
    IdentityService,
    PostService,
    UserService,
)
from inkwell.domain.value import CAN_MODERATE, CommentSortField, SortDirection

from .common import (
    CommentItem,
    CommentReferences,
    PaginationInfo,
    clamp_limit,
    parse_post_id,
    parse_status,
    to_comment_item,
    to_pagination,
)


class ListCommentsAdminRequest(WireModel):
    """Moderation listing request. ``status`` of ``all`` means no status filter."""

    auth_token: str | None = None
    post_id: str | None = None
    status: str | None = None
    search: str | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    page: int = 1
    limit: int | None = None


class ListCommentsAdminResponse(WireModel):
    success: bool = True
    comments: list[CommentItem]
    pagination: PaginationInfo


class ListCommentsAdminUseCase(BaseUseCase):
    """Use case for the flat, filterable moderation queue."""

    def __init__(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
        user_service: UserService,
        post_service: PostService,
        comment_settings: CommentSettings,
    ) -> None:
        self.identity_service = identity_service
        self.authorization_service = authorization_service
        self.comment_service = comment_service
        self.user_service = user_service
        self.post_service = post_service
        self.comment_settings = comment_settings

    def _sort(self, request: ListCommentsAdminRequest) -> tuple[CommentSortField, SortDirection]:
        try:
            sort_by = CommentSortField(to_snake(request.sort_by))
        except ValueError:
            raise ValidationError(
                "Invalid sort field. Must be created_at, moderated_at, or status"
            )
        try:
            direction = SortDirection(request.sort_order.lower())
        except ValueError:
            raise ValidationError("Invalid sort order. Must be asc or desc")
        return sort_by, direction

    async def execute(
        self, request: ListCommentsAdminRequest
    ) -> ListCommentsAdminResponse:
        """Execute moderation listing flow.

        Raises:
            NotAuthenticatedError: No usable credential
            ForbiddenError: Caller can't moderate
            ValidationError: Bad status, sort field or direction
        """
        principal = await self.identity_service.resolve(request.auth_token)
        self.authorization_service.require(principal, CAN_MODERATE)

        sort_by, direction = self._sort(request)
        search = (request.search or "").strip() or None
        comment_filter = CommentFilter(
            post_id=parse_post_id(request.post_id) if request.post_id else None,
            status=(
                parse_status(request.status)
                if request.status and request.status != "all"
                else None
            ),
            search=search,
        )
        page = max(request.page, 1)
        limit = clamp_limit(request.limit, self.comment_settings.pagination)

        with logfire.span(
            "list_comments_admin.execute",
            status=request.status,
            has_search=search is not None,
            page=page,
        ):
            listing = await self.comment_service.list_comments(
                comment_filter,
                page=page,
                limit=limit,
                sort_by=sort_by,
                direction=direction,
            )
            references = await CommentReferences.load(
                listing.items, self.user_service, self.post_service
            )
            return ListCommentsAdminResponse(
                comments=[
                    to_comment_item(c, references, include_private=True)
                    for c in listing.items
                ],
                pagination=to_pagination(listing),
            )
