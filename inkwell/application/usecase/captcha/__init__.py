"""CAPTCHA use cases."""

from .create_challenge import (
    CreateChallengeRequest,
    CreateChallengeResponse,
    CreateChallengeUseCase,
)

__all__ = [
    "CreateChallengeRequest",
    "CreateChallengeResponse",
    "CreateChallengeUseCase",
]
