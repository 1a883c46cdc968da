"""Get comments for a post use case."""

import logfire

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.config import CommentSettings
from inkwell.domain.error import NotFoundError
from inkwell.domain.model import CommentNode, Page
from inkwell.domain.repository import CommentFilter
from inkwell.domain.service import (
    AuthorizationService,
    CommentService,
    IdentityService,
    PostService,
    UserService,
)
from inkwell.domain.value import CAN_MODERATE, CommentStatus

from .common import (
    CommentItem,
    CommentReferences,
    PaginationInfo,
    clamp_limit,
    iter_forest,
    parse_post_id,
    parse_status,
    to_comment_item,
    to_pagination,
    to_tree_items,
)

ALL_STATUSES = "all"


class GetCommentsRequest(WireModel):
    """Get comments request.

    ``status`` is honored for moderators only; everyone else sees approved
    comments whatever they ask for.
    """

    post_id: str
    auth_token: str | None = None
    status: str | None = None
    page: int = 1
    limit: int | None = None


class GetCommentsResponse(WireModel):
    success: bool = True
    comments: list[CommentItem]
    pagination: PaginationInfo


class GetCommentsUseCase(BaseUseCase):
    """Use case for reading the comments of a post."""

    def __init__(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        post_service: PostService,
        comment_service: CommentService,
        user_service: UserService,
        comment_settings: CommentSettings,
    ) -> None:
        self.identity_service = identity_service
        self.authorization_service = authorization_service
        self.post_service = post_service
        self.comment_service = comment_service
        self.user_service = user_service
        self.comment_settings = comment_settings

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Public callers get the approved thread tree, paginated over root
        comments. Moderators may pick one status to get that status's tree,
        or ``all`` to get a flat listing across every status.

        Raises:
            NotFoundError: Post missing (or unpublished, for non-moderators)
            ValidationError: Unknown status (moderators)
        """
        post_id = parse_post_id(request.post_id)
        page = max(request.page, 1)
        limit = clamp_limit(request.limit, self.comment_settings.pagination)

        with logfire.span(
            "get_comments.execute", post_id=str(post_id), page=page, limit=limit
        ):
            principal = await self.identity_service.resolve_optional(request.auth_token)
            is_moderator = self.authorization_service.authorize(principal, CAN_MODERATE)

            if not is_moderator:
                await self.post_service.get_visible_post(post_id)
                tree = await self.comment_service.get_tree_page(
                    post_id, {CommentStatus.APPROVED}, page, limit
                )
                return await self._tree_response(tree)

            if await self.post_service.get_post_by_id(post_id) is None:
                raise NotFoundError("Post", str(post_id))

            if request.status == ALL_STATUSES:
                listing = await self.comment_service.list_comments(
                    CommentFilter(post_id=post_id), page=page, limit=limit
                )
                references = await CommentReferences.load(
                    listing.items, self.user_service
                )
                return GetCommentsResponse(
                    comments=[
                        to_comment_item(c, references, include_private=True)
                        for c in listing.items
                    ],
                    pagination=to_pagination(listing),
                )

            status = (
                parse_status(request.status) if request.status else CommentStatus.APPROVED
            )
            tree = await self.comment_service.get_tree_page(post_id, {status}, page, limit)
            return await self._tree_response(tree, include_private=True)

    async def _tree_response(
        self, tree: Page[CommentNode], include_private: bool = False
    ) -> GetCommentsResponse:
        references = await CommentReferences.load(
            iter_forest(tree.items), self.user_service
        )
        return GetCommentsResponse(
            comments=to_tree_items(
                tree.items,
                self.comment_settings.max_display_depth,
                references,
                include_private=include_private,
            ),
            pagination=to_pagination(tree),
        )
