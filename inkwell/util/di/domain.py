"""Domain layer DI providers."""

from dishka import Scope, provide

from inkwell.config import AuthSettings, Settings
from inkwell.domain.repository import (
    CommentRepository,
    PostRepository,
    RoleRepository,
    UserRepository,
)
from inkwell.domain.service import (
    AuthorizationService,
    CaptchaClient,
    CaptchaService,
    CommentService,
    ContentSafetyChecker,
    IdentityService,
    JWTService,
    PatternContentSafetyChecker,
    PostService,
    SubmissionThrottle,
    ThrottleService,
    UserService,
)
from inkwell.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self,
        jwt_service: JWTService,
        user_repository: UserRepository,
        role_repository: RoleRepository,
    ) -> IdentityService:
        """Provide identity resolution service."""
        return IdentityService(
            jwt_service=jwt_service,
            user_repository=user_repository,
            role_repository=role_repository,
        )

    @provide
    def get_authorization_service(self) -> AuthorizationService:
        """Provide authorization gate."""
        return AuthorizationService()

    @provide(scope=Scope.APP)
    def get_content_safety_checker(self) -> ContentSafetyChecker:
        """Provide XSS-safety checker."""
        return PatternContentSafetyChecker()

    @provide
    def get_captcha_service(
        self, captcha_client: CaptchaClient, settings: Settings
    ) -> CaptchaService:
        """Provide CAPTCHA gate."""
        return CaptchaService(
            captcha_client=captcha_client,
            bypass_token=settings.comments.captcha.bypass_token,
            bypass_allowed=settings.captcha_bypass_allowed,
        )

    @provide
    def get_throttle_service(
        self, throttle: SubmissionThrottle, settings: Settings
    ) -> ThrottleService:
        """Provide submission throttle gate."""
        return ThrottleService(throttle=throttle, enabled=settings.throttle_active)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        content_safety: ContentSafetyChecker,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            content_safety=content_safety,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)
