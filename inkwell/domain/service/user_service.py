"""User domain service."""

from collections.abc import Iterable

import logfire

from inkwell.domain.model import User
from inkwell.domain.repository import UserRepository
from inkwell.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for the user lookups comment views depend on."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_users_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Batch-load users, keyed by ID.

        Unknown IDs (e.g. a since-deleted moderator) are left out of the
        result rather than raising.
        """
        ids = set(user_ids)
        if not ids:
            return {}

        with logfire.span("user_service.get_users_by_ids", requested=len(ids)):
            users = await self.user_repository.find_by_ids(ids)
            if len(users) < len(ids):
                logfire.info(
                    "Some users not found", requested=len(ids), found=len(users)
                )
            return users
