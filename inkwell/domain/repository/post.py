"""Post repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional

from inkwell.domain.model.post import Post
from inkwell.domain.value import PostId


class PostRepository(ABC):
    """Read access to posts for the comment subsystem."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        """Find many posts at once, keyed by ID. Unknown IDs are left out."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass
