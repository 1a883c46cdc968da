"""Reply to comment use case."""

import logfire

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.domain.service import (
    AuthorizationService,
    CommentService,
    IdentityService,
    UserService,
)
from inkwell.domain.value import CAN_REPLY

from .common import CommentItem, CommentReferences, parse_comment_id, to_comment_item


class ReplyCommentRequest(WireModel):
    """Reply request. Replies always come from a registered user."""

    comment_id: str
    content: str
    auth_token: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


class ReplyCommentResponse(WireModel):
    success: bool = True
    message: str = "Reply posted successfully"
    comment: CommentItem


class ReplyCommentUseCase(BaseUseCase):
    """Use case for replying under an existing comment."""

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

    async def execute(self, request: ReplyCommentRequest) -> ReplyCommentResponse:
        """Execute reply flow.

        Raises:
            NotAuthenticatedError: No usable credential
            ForbiddenError: Caller can't reply
            ValidationError: Malformed input
            NotFoundError: Parent comment missing
        """
        with logfire.span("reply_comment.execute", parent_id=request.comment_id):
            principal = await self.identity_service.resolve(request.auth_token)
            principal = self.authorization_service.require(principal, CAN_REPLY)

            reply = await self.comment_service.reply(
                parent_id=parse_comment_id(request.comment_id),
                content=request.content,
                author_id=principal.user_id,
                ip_address=request.ip_address,
                user_agent=request.user_agent,
            )
            references = await CommentReferences.load([reply], self.user_service)
            return ReplyCommentResponse(comment=to_comment_item(reply, references))
