"""In-memory role repository for testing."""

from typing import Optional

from inkwell.domain.model.role import Role
from inkwell.domain.repository.role import RoleRepository
from inkwell.domain.value import RoleId


class InMemoryRoleRepository(RoleRepository):
    """In-memory implementation of RoleRepository for testing."""

    def __init__(self) -> None:
        self._roles: dict[RoleId, Role] = {}

    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        return self._roles.get(role_id)

    async def save(self, role: Role) -> Role:
        self._roles[role.id] = role
        return role
