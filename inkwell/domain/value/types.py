"""Domain value objects for Inkwell.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from inkwell.domain.value.common import ValueObject
from inkwell.domain.value.identifiers import RoleId, UserId


class CommentStatus(str, Enum):
    """Moderation status of a comment.

    All four values may transition to each other. Deletion is not a status:
    a deleted comment no longer exists.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SPAM = "spam"

    @classmethod
    def moderation_targets(cls) -> frozenset["CommentStatus"]:
        """Statuses a moderator may assign explicitly."""
        return frozenset({cls.APPROVED, cls.REJECTED, cls.SPAM})


class BulkAction(str, Enum):
    """Action applied to a set of comments in one request."""

    APPROVE = "approve"
    REJECT = "reject"
    SPAM = "spam"
    DELETE = "delete"

    @property
    def target_status(self) -> CommentStatus | None:
        """Status assigned by this action (None for delete)."""
        return {
            BulkAction.APPROVE: CommentStatus.APPROVED,
            BulkAction.REJECT: CommentStatus.REJECTED,
            BulkAction.SPAM: CommentStatus.SPAM,
        }.get(self)


class Privilege(str, Enum):
    """Privilege codes consumed by the comment subsystem."""

    REPLY_COMMENTS = "reply_comments"
    MANAGE_COMMENTS = "manage_comments"


# Named capabilities
CAN_REPLY: frozenset[Privilege] = frozenset({Privilege.REPLY_COMMENTS})
CAN_MODERATE: frozenset[Privilege] = frozenset({Privilege.MANAGE_COMMENTS})


class CommentSortField(str, Enum):
    """Sortable fields for the moderation listing."""

    CREATED_AT = "created_at"
    MODERATED_AT = "moderated_at"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Principal(ValueObject):
    """Resolved identity of an authenticated caller.

    Anonymous callers are represented by ``None`` rather than a principal.
    """

    user_id: UserId
    username: str
    role_id: RoleId
    role_name: str
    privileges: frozenset[str] = frozenset()
    is_superuser: bool = False
