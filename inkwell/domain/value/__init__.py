"""Domain value objects for Inkwell."""

from inkwell.domain.value.identifiers import CommentId, PostId, RoleId, UserId
from inkwell.domain.value.types import (
    CAN_MODERATE,
    CAN_REPLY,
    BulkAction,
    CommentSortField,
    CommentStatus,
    Principal,
    Privilege,
    SortDirection,
)

__all__ = [
    # Identifiers
    "CommentId",
    "PostId",
    "RoleId",
    "UserId",
    # Types
    "BulkAction",
    "CommentSortField",
    "CommentStatus",
    "Principal",
    "Privilege",
    "SortDirection",
    # Capabilities
    "CAN_MODERATE",
    "CAN_REPLY",
]
