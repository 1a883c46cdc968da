"""User aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import RoleId, UserId


class User(DomainModel):
    """Registered user. Every user holds exactly one role."""

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    email: str
    full_name: Optional[str] = None
    role_id: RoleId
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def display_name(self) -> str:
        """Full name when the user has set one, otherwise the username."""
        return self.full_name or self.username
