"""Role repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from inkwell.domain.model.role import Role
from inkwell.domain.value import RoleId


class RoleRepository(ABC):
    """Repository for Role entity with its privilege codes."""

    @abstractmethod
    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        """Find a role by ID, privileges included."""
        pass

    @abstractmethod
    async def save(self, role: Role) -> Role:
        """Save a role (create or update), replacing its privilege set."""
        pass
