"""PostgreSQL implementation of Role repository."""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.model import Role
from inkwell.domain.repository import RoleRepository
from inkwell.domain.value import RoleId
from inkwell.persistence.mappers import role_to_dict, row_to_role
from inkwell.persistence.tables import roles_table


class PostgresRoleRepository(RoleRepository):
    """PostgreSQL implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, role_id: RoleId) -> Optional[Role]:
        """Find a role by ID."""
        stmt = select(roles_table).where(roles_table.c.id == role_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_role(row._asdict()) if row else None

    async def save(self, role: Role) -> Role:
        """Save a role (create or update)."""
        values = role_to_dict(role)
        if await self.find_by_id(role.id):
            stmt = (
                update(roles_table)
                .where(roles_table.c.id == role.id)
                .values(**values)
            )
        else:
            stmt = roles_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return role
