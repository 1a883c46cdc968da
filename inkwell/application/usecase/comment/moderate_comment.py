"""Moderate comment use case."""

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.domain.service import (
    AuthorizationService,
    CommentService,
    IdentityService,
    UserService,
)
from inkwell.domain.value import CAN_MODERATE, CommentStatus

from .common import CommentItem, CommentReferences, parse_comment_id, to_comment_item

_MESSAGES = {
    CommentStatus.APPROVED: "Comment approved",
    CommentStatus.REJECTED: "Comment rejected",
    CommentStatus.SPAM: "Comment marked as spam",
}


class ModerateCommentRequest(WireModel):
    comment_id: str
    status: str
    auth_token: str | None = None


class ModerateCommentResponse(WireModel):
    success: bool = True
    message: str
    comment: CommentItem


class ModerateCommentUseCase(BaseUseCase):
    """Use case for moving one comment to approved, rejected or spam."""

    def __init__(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        self.identity_service = identity_service
        self.authorization_service = authorization_service
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(
        self, request: ModerateCommentRequest
    ) -> ModerateCommentResponse:
        """Execute moderation flow.

        Raises:
            NotAuthenticatedError: No usable credential
            ForbiddenError: Caller can't moderate
            ValidationError: Target status is not approved, rejected or spam
            NotFoundError: Comment missing
        """
        principal = await self.identity_service.resolve(request.auth_token)
        principal = self.authorization_service.require(principal, CAN_MODERATE)

        comment = await self.comment_service.set_status(
            parse_comment_id(request.comment_id),
            request.status,
            moderator_id=principal.user_id,
        )
        references = await CommentReferences.load([comment], self.user_service)
        return ModerateCommentResponse(
            message=_MESSAGES[comment.status],
            comment=to_comment_item(comment, references, include_private=True),
        )
