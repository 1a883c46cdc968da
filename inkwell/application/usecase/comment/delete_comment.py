"""Delete comment use case."""

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.domain.service import AuthorizationService, CommentService, IdentityService
from inkwell.domain.value import CAN_MODERATE

from .common import parse_comment_id


class DeleteCommentRequest(WireModel):
    comment_id: str
    auth_token: str | None = None


class DeleteCommentResponse(WireModel):
    success: bool = True
    message: str = "Comment deleted successfully"
    deleted_count: int
    replies_deleted: int


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment together with its whole reply subtree."""

    def __init__(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
    ) -> None:
        self.identity_service = identity_service
        self.authorization_service = authorization_service
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete flow.

        Raises:
            NotAuthenticatedError: No usable credential
            ForbiddenError: Caller can't moderate
            NotFoundError: Comment missing
            UnavailableError: Cascade could not complete (transaction rolls back)
        """
        principal = await self.identity_service.resolve(request.auth_token)
        self.authorization_service.require(principal, CAN_MODERATE)

        removed = await self.comment_service.delete_comment(
            parse_comment_id(request.comment_id)
        )
        return DeleteCommentResponse(deleted_count=removed, replies_deleted=removed - 1)
