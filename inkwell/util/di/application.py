"""Application layer DI providers."""

from dishka import Scope, provide

from inkwell.application.usecase.captcha import CreateChallengeUseCase
from inkwell.application.usecase.comment import (
    BulkActionUseCase,
    CommentStatsUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    ListCommentsAdminUseCase,
    ModerateCommentUseCase,
    ReplyCommentUseCase,
)
from inkwell.config import CommentSettings
from inkwell.domain.service import (
    AuthorizationService,
    CaptchaService,
    CommentService,
    IdentityService,
    PostService,
    ThrottleService,
    UserService,
)
from inkwell.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        identity_service: IdentityService,
        throttle_service: ThrottleService,
        captcha_service: CaptchaService,
        post_service: PostService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            identity_service=identity_service,
            throttle_service=throttle_service,
            captcha_service=captcha_service,
            post_service=post_service,
            comment_service=comment_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_reply_comment_use_case(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> ReplyCommentUseCase:
        """Provide reply use case."""
        return ReplyCommentUseCase(
            identity_service=identity_service,
            authorization_service=authorization_service,
            comment_service=comment_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        post_service: PostService,
        comment_service: CommentService,
        user_service: UserService,
        comment_settings: CommentSettings,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            identity_service=identity_service,
            authorization_service=authorization_service,
            post_service=post_service,
            comment_service=comment_service,
            user_service=user_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_comments_admin_use_case(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
        user_service: UserService,
        post_service: PostService,
        comment_settings: CommentSettings,
    ) -> ListCommentsAdminUseCase:
        """Provide moderation listing use case."""
        return ListCommentsAdminUseCase(
            identity_service=identity_service,
            authorization_service=authorization_service,
            comment_service=comment_service,
            user_service=user_service,
            post_service=post_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_moderate_comment_use_case(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(
            identity_service=identity_service,
            authorization_service=authorization_service,
            comment_service=comment_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            identity_service=identity_service,
            authorization_service=authorization_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_bulk_action_use_case(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
    ) -> BulkActionUseCase:
        """Provide bulk moderation use case."""
        return BulkActionUseCase(
            identity_service=identity_service,
            authorization_service=authorization_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_comment_stats_use_case(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
    ) -> CommentStatsUseCase:
        """Provide comment statistics use case."""
        return CommentStatsUseCase(
            identity_service=identity_service,
            authorization_service=authorization_service,
            comment_service=comment_service,
        )

    # CAPTCHA use cases
    @provide(scope=Scope.REQUEST)
    def get_create_challenge_use_case(
        self, captcha_service: CaptchaService
    ) -> CreateChallengeUseCase:
        """Provide CAPTCHA challenge use case."""
        return CreateChallengeUseCase(captcha_service=captcha_service)
