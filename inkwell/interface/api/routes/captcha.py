"""CAPTCHA routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from inkwell.application.usecase.captcha import (
    CreateChallengeRequest,
    CreateChallengeResponse,
    CreateChallengeUseCase,
)

router = APIRouter(prefix="/captcha", tags=["captcha"], route_class=DishkaRoute)


@router.get("", response_model=CreateChallengeResponse)
async def create_challenge(
    create_challenge_use_case: FromDishka[CreateChallengeUseCase],
) -> CreateChallengeResponse:
    """Issue a CAPTCHA challenge for an anonymous comment."""
    return await create_challenge_use_case.execute(CreateChallengeRequest())
