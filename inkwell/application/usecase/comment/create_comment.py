"""Create comment use case."""

import logfire

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.domain.service import (
    CaptchaAnswer,
    CaptchaService,
    CommentService,
    IdentityService,
    PostService,
    ThrottleService,
    UserService,
)

from .common import CommentItem, CommentReferences, parse_post_id, to_comment_item


class CreateCommentRequest(WireModel):
    """Create comment request.

    Guest fields and CAPTCHA proof are only read for anonymous callers.
    """

    post_id: str
    content: str
    auth_token: str | None = None

    author_name: str | None = None
    author_email: str | None = None
    author_website: str | None = None

    captcha_token: str | None = None
    captcha_session_id: str | None = None
    captcha_text: str | None = None
    test_bypass_token: str | None = None

    ip_address: str | None = None
    user_agent: str | None = None


class CreateCommentResponse(WireModel):
    """Create comment response."""

    success: bool = True
    message: str
    comment: CommentItem


class CreateCommentUseCase(BaseUseCase):
    """Use case for posting a root comment, as a registered user or a guest."""

    def __init__(
        self,
        identity_service: IdentityService,
        throttle_service: ThrottleService,
        captcha_service: CaptchaService,
        post_service: PostService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        self.identity_service = identity_service
        self.throttle_service = throttle_service
        self.captcha_service = captcha_service
        self.post_service = post_service
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Resolve the caller (an unusable token degrades to anonymous)
        2. Anonymous only: count against the throttle, then check the CAPTCHA
        3. Verify the post exists and is published
        4. Create the comment (approved when registered, pending when guest)

        Raises:
            RateLimitedError: Anonymous client over the submission limit
            InvalidChallengeError: CAPTCHA missing or wrong
            ValidationError: Malformed input
            NotFoundError: Post missing or unpublished
        """
        with logfire.span("create_comment.execute", post_id=request.post_id):
            principal = await self.identity_service.resolve_optional(request.auth_token)

            if principal is None:
                await self.throttle_service.check(request.ip_address or "unknown")
                await self.captcha_service.check(
                    principal,
                    CaptchaAnswer(
                        token=request.captcha_token,
                        session_id=request.captcha_session_id,
                        text=request.captcha_text,
                        bypass_token=request.test_bypass_token,
                    ),
                )

            post_id = parse_post_id(request.post_id)
            await self.post_service.get_visible_post(post_id)

            comment = await self.comment_service.create_comment(
                post_id=post_id,
                content=request.content,
                author_id=principal.user_id if principal else None,
                guest_name=request.author_name,
                guest_email=request.author_email,
                guest_website=request.author_website,
                ip_address=request.ip_address,
                user_agent=request.user_agent,
            )

            references = await CommentReferences.load([comment], self.user_service)
            return CreateCommentResponse(
                message=(
                    "Comment posted successfully"
                    if principal
                    else "Comment submitted for moderation"
                ),
                comment=to_comment_item(comment, references),
            )
