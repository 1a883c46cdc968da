"""Comment statistics use case."""

from pydantic import Field

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.domain.service import AuthorizationService, CommentService, IdentityService
from inkwell.domain.value import CAN_MODERATE, CommentStatus


class CommentStatsRequest(WireModel):
    auth_token: str | None = None


class StatsView(WireModel):
    total: int
    # to_camel would give "recent24H"
    recent_24h: int = Field(alias="recent24h")
    pending: int
    approved: int
    rejected: int
    spam: int


class CommentStatsResponse(WireModel):
    success: bool = True
    stats: StatsView


class CommentStatsUseCase(BaseUseCase):
    """Use case for the moderation dashboard counters."""

    def __init__(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
    ) -> None:
        self.identity_service = identity_service
        self.authorization_service = authorization_service
        self.comment_service = comment_service

    async def execute(self, request: CommentStatsRequest) -> CommentStatsResponse:
        principal = await self.identity_service.resolve(request.auth_token)
        self.authorization_service.require(principal, CAN_MODERATE)

        stats = await self.comment_service.get_stats()
        return CommentStatsResponse(
            stats=StatsView(
                total=stats.total,
                recent_24h=stats.recent_24h,
                pending=stats.by_status[CommentStatus.PENDING],
                approved=stats.by_status[CommentStatus.APPROVED],
                rejected=stats.by_status[CommentStatus.REJECTED],
                spam=stats.by_status[CommentStatus.SPAM],
            )
        )
