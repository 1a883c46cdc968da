"""CAPTCHA gate domain service."""

import secrets

import logfire

from inkwell.domain.error import InvalidChallengeError
from inkwell.domain.value import Principal
from inkwell.domain.value.common import ValueObject

from .base import Service


class CaptchaChallenge(ValueObject):
    """A freshly issued challenge."""

    session_id: str
    image_data_url: str


class CaptchaAnswer(ValueObject):
    """Challenge proof supplied with an anonymous write.

    Either ``token`` (a previously validated token) or ``session_id`` plus
    ``text`` (a solution to an issued challenge).
    """

    token: str | None = None
    session_id: str | None = None
    text: str | None = None
    bypass_token: str | None = None


class CaptchaClient:
    """CAPTCHA service interface.

    Implementations raise ``UnavailableError`` when the service cannot be
    reached; a wrong answer is reported as ``False``, not as an error.
    """

    async def create_challenge(self) -> CaptchaChallenge:
        """Issue a new challenge."""
        raise NotImplementedError

    async def verify(self, session_id: str, text: str) -> bool:
        """Check a solution against an issued challenge (one-time use)."""
        raise NotImplementedError

    async def verify_token(self, token: str) -> bool:
        """Check a previously issued validation token (one-time use)."""
        raise NotImplementedError


class CaptchaService(Service):
    """Decides when a challenge is required and checks the answer."""

    def __init__(
        self,
        captcha_client: CaptchaClient,
        bypass_token: str | None = None,
        bypass_allowed: bool = False,
    ) -> None:
        """Initialize CAPTCHA service.

        Args:
            captcha_client: CAPTCHA service client
            bypass_token: Operator-configured secret that skips the challenge
            bypass_allowed: Whether the deployment may honor the bypass token
        """
        self.captcha_client = captcha_client
        self.bypass_token = bypass_token
        self.bypass_allowed = bypass_allowed

    def requires_challenge(
        self, principal: Principal | None, bypass_token: str | None = None
    ) -> bool:
        """Whether this caller must solve a challenge."""
        if principal is not None:
            return False
        if self.bypass_allowed and self.bypass_token and bypass_token:
            if secrets.compare_digest(bypass_token, self.bypass_token):
                logfire.info("CAPTCHA bypassed with operator token")
                return False
        return True

    async def issue_challenge(self) -> CaptchaChallenge:
        with logfire.span("captcha_service.issue_challenge"):
            challenge = await self.captcha_client.create_challenge()
            logfire.info("CAPTCHA challenge issued", session_id=challenge.session_id)
            return challenge

    async def check(self, principal: Principal | None, answer: CaptchaAnswer) -> None:
        """Verify the answer when the caller needs a challenge.

        Raises:
            InvalidChallengeError: Answer missing or wrong
            UnavailableError: CAPTCHA service failure
        """
        if not self.requires_challenge(principal, answer.bypass_token):
            return

        with logfire.span("captcha_service.check"):
            if answer.token:
                if await self.captcha_client.verify_token(answer.token):
                    return
                logfire.warn("CAPTCHA token rejected")
                raise InvalidChallengeError()

            if not answer.session_id or not answer.text:
                raise InvalidChallengeError("CAPTCHA verification required")

            if not await self.captcha_client.verify(answer.session_id, answer.text):
                logfire.warn("CAPTCHA solution rejected", session_id=answer.session_id)
                raise InvalidChallengeError()
