"""CAPTCHA infrastructure providers."""

from dishka import Scope, provide

from inkwell.adapter.captcha import HttpCaptchaClient
from inkwell.config import Settings
from inkwell.domain.service import CaptchaClient
from inkwell.util.di.base import ProviderBase


class CaptchaProvider(ProviderBase):
    """CAPTCHA component base."""

    __mock_component__ = "captcha"


class ProdCaptchaProvider(CaptchaProvider):
    """Production CAPTCHA provider talking to the external service."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_captcha_client(self, settings: Settings) -> CaptchaClient:
        """Provide CAPTCHA service HTTP client."""
        return HttpCaptchaClient(
            base_url=settings.comments.captcha.service_url,
            timeout=settings.comments.captcha.timeout_seconds,
        )
