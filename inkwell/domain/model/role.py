"""Role entity."""

from datetime import datetime

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import RoleId


class Role(DomainModel):
    """Role granting a set of privilege codes.

    A superuser role is authorized for every privilege regardless of its
    explicit grants, so at least one role can always administer the system.
    """

    id: RoleId
    name: str = Field(min_length=1, max_length=50)
    privileges: frozenset[str] = frozenset()
    is_superuser: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
