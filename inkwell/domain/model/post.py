"""Post reference.

Posts are owned by the content subsystem. The comment subsystem only needs
to know whether a post exists and whether visitors may see it.
"""

from datetime import datetime

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import PostId, UserId


class Post(DomainModel):
    """Post as seen by the comment subsystem."""

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    author_id: UserId
    is_published: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
