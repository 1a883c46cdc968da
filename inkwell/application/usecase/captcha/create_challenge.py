"""Issue CAPTCHA challenge use case."""

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.domain.service import CaptchaService


class CreateChallengeRequest(WireModel):
    pass


class CreateChallengeResponse(WireModel):
    success: bool = True
    session_id: str
    image_data_url: str


class CreateChallengeUseCase(BaseUseCase):
    """Use case for handing a fresh challenge to an anonymous client."""

    def __init__(self, captcha_service: CaptchaService) -> None:
        self.captcha_service = captcha_service

    async def execute(self, request: CreateChallengeRequest) -> CreateChallengeResponse:
        challenge = await self.captcha_service.issue_challenge()
        return CreateChallengeResponse(
            session_id=challenge.session_id,
            image_data_url=challenge.image_data_url,
        )
