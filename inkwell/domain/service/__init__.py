"""Domain services."""

from .authorization_service import AuthorizationService
from .base import Service
from .captcha_service import CaptchaAnswer, CaptchaChallenge, CaptchaClient, CaptchaService
from .comment_service import BulkDeleteResult, CommentService, build_forest
from .content_safety import ContentSafetyChecker, PatternContentSafetyChecker
from .identity_service import IdentityService
from .jwt_service import JWTService
from .post_service import PostService
from .throttle_service import SubmissionThrottle, ThrottleService
from .user_service import UserService

__all__ = [
    "AuthorizationService",
    "BulkDeleteResult",
    "CaptchaAnswer",
    "CaptchaChallenge",
    "CaptchaClient",
    "CaptchaService",
    "CommentService",
    "ContentSafetyChecker",
    "IdentityService",
    "JWTService",
    "PatternContentSafetyChecker",
    "PostService",
    "Service",
    "SubmissionThrottle",
    "ThrottleService",
    "UserService",
    "build_forest",
]
