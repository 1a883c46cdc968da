"""Comment entity.

Comments are threaded discussions on posts with unlimited depth. Threading
is an adjacency list: each reply points at its direct parent through
``parent_id`` and the tree is rebuilt on read.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import CommentId, CommentStatus, PostId, UserId

MAX_CONTENT_LENGTH = 1000
MAX_GUEST_NAME_LENGTH = 100
MAX_GUEST_EMAIL_LENGTH = 100
MAX_GUEST_WEBSITE_LENGTH = 200


class RegisteredAuthor(DomainModel):
    """Comment written by an authenticated user."""

    kind: Literal["registered"] = "registered"
    user_id: UserId


class GuestAuthor(DomainModel):
    """Comment written by an anonymous visitor."""

    kind: Literal["guest"] = "guest"
    name: str = Field(min_length=1, max_length=MAX_GUEST_NAME_LENGTH)
    email: str = Field(min_length=3, max_length=MAX_GUEST_EMAIL_LENGTH)
    website: Optional[str] = Field(default=None, max_length=MAX_GUEST_WEBSITE_LENGTH)


CommentAuthor = Annotated[
    Union[RegisteredAuthor, GuestAuthor], Field(discriminator="kind")
]


class Comment(DomainModel):
    """Comment entity.

    Exactly one author variant is populated and it never changes after
    creation. Content is immutable too; only the moderation fields
    (status, moderated_by, moderated_at) are ever rewritten.
    """

    id: CommentId
    post_id: PostId
    parent_id: Optional[CommentId] = None
    author: CommentAuthor
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    status: CommentStatus = CommentStatus.PENDING
    moderated_by: Optional[UserId] = None
    moderated_at: Optional[datetime] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_guest(self) -> bool:
        return isinstance(self.author, GuestAuthor)


class CommentNode(DomainModel):
    """A comment with its visible replies, as assembled for a thread view."""

    comment: Comment
    replies: list["CommentNode"] = Field(default_factory=list)
