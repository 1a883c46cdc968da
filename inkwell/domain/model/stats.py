"""Comment statistics for the moderation dashboard."""

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import CommentStatus


class CommentStats(DomainModel):
    """Comment counts. ``by_status`` holds an entry for every status."""

    total: int
    recent_24h: int
    by_status: dict[CommentStatus, int]
