"""PostgreSQL repository implementations."""

from inkwell.persistence.repository.comment import PostgresCommentRepository
from inkwell.persistence.repository.post import PostgresPostRepository
from inkwell.persistence.repository.role import PostgresRoleRepository
from inkwell.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresPostRepository",
    "PostgresRoleRepository",
    "PostgresUserRepository",
]
