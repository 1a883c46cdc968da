"""CAPTCHA service adapter."""

from .client import CaptchaServiceClient, HttpCaptchaClient, MockCaptchaClient

__all__ = ["CaptchaServiceClient", "HttpCaptchaClient", "MockCaptchaClient"]
