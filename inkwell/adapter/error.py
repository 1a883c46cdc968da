"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class CaptchaProtocolError(AdapterError):
    """CAPTCHA service answered with something we can't interpret."""

    pass
