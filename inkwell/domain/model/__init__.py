"""Domain model entities for Inkwell."""

from inkwell.domain.model.comment import (
    Comment,
    CommentAuthor,
    CommentNode,
    GuestAuthor,
    RegisteredAuthor,
)
from inkwell.domain.model.page import Page
from inkwell.domain.model.post import Post
from inkwell.domain.model.role import Role
from inkwell.domain.model.stats import CommentStats
from inkwell.domain.model.user import User

__all__ = [
    "Comment",
    "CommentAuthor",
    "CommentNode",
    "CommentStats",
    "GuestAuthor",
    "Page",
    "Post",
    "RegisteredAuthor",
    "Role",
    "User",
]
