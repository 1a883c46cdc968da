"""In-memory user repository for testing."""

from collections.abc import Iterable
from typing import Optional

from inkwell.domain.model.user import User
from inkwell.domain.repository.user import UserRepository
from inkwell.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        return {i: self._users[i] for i in set(user_ids) if i in self._users}

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user
