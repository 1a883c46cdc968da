"""Repository interfaces for the Inkwell domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from inkwell.domain.repository.comment import CommentFilter, CommentRepository
from inkwell.domain.repository.post import PostRepository
from inkwell.domain.repository.role import RoleRepository
from inkwell.domain.repository.user import UserRepository

__all__ = [
    "CommentFilter",
    "CommentRepository",
    "PostRepository",
    "RoleRepository",
    "UserRepository",
]
