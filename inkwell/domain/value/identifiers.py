"""Strongly typed identifiers for Inkwell domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
RoleId = NewType("RoleId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
