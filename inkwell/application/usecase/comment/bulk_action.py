"""Bulk moderation use case."""

from uuid import UUID

import logfire

from inkwell.application.usecase.base import BaseUseCase, WireModel
from inkwell.domain.error import ValidationError
from inkwell.domain.service import AuthorizationService, CommentService, IdentityService
from inkwell.domain.value import CAN_MODERATE, BulkAction, CommentId


class BulkActionRequest(WireModel):
    comment_ids: list[str] = []
    action: str
    auth_token: str | None = None


class BulkActionResponse(WireModel):
    """Bulk result. Status actions fill ``updated_count``; delete fills the others."""

    success: bool = True
    message: str
    updated_count: int | None = None
    deleted_count: int | None = None
    replies_deleted: int | None = None


def _valid_ids(raw_ids: list[str]) -> set[CommentId]:
    ids = set()
    for raw in raw_ids:
        try:
            ids.add(CommentId(UUID(raw)))
        except (ValueError, TypeError, AttributeError):
            logfire.debug("Skipping malformed comment id in bulk request", raw=raw)
    return ids


class BulkActionUseCase(BaseUseCase):
    """Use case for approving, rejecting, flagging or deleting many comments."""

    def __init__(
        self,
        identity_service: IdentityService,
        authorization_service: AuthorizationService,
        comment_service: CommentService,
    ) -> None:
        self.identity_service = identity_service
        self.authorization_service = authorization_service
        self.comment_service = comment_service

    async def execute(self, request: BulkActionRequest) -> BulkActionResponse:
        """Execute bulk flow.

        Unknown or malformed ids are skipped rather than failing the batch.

        Raises:
            NotAuthenticatedError: No usable credential
            ForbiddenError: Caller can't moderate
            ValidationError: Empty id list or unknown action
            UnavailableError: Cascade delete could not complete
        """
        principal = await self.identity_service.resolve(request.auth_token)
        principal = self.authorization_service.require(principal, CAN_MODERATE)

        if not request.comment_ids:
            raise ValidationError("Comment IDs array is required")
        try:
            action = BulkAction(request.action)
        except ValueError:
            raise ValidationError(
                "Invalid action. Must be approve, reject, spam, or delete"
            )

        ids = _valid_ids(request.comment_ids)
        message = f"Bulk {action.value} completed successfully"

        with logfire.span(
            "bulk_action.execute", action=action.value, requested=len(request.comment_ids)
        ):
            if action == BulkAction.DELETE:
                result = await self.comment_service.bulk_delete(ids)
                return BulkActionResponse(
                    message=message,
                    deleted_count=result.deleted_count,
                    replies_deleted=result.replies_deleted,
                )

            updated = await self.comment_service.bulk_set_status(
                ids, action.target_status, moderator_id=principal.user_id
            )
            return BulkActionResponse(message=message, updated_count=updated)
