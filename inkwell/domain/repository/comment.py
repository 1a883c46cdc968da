"""Comment repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import List, Optional

from inkwell.domain.model.comment import Comment
from inkwell.domain.value import (
    CommentId,
    CommentSortField,
    CommentStatus,
    PostId,
    SortDirection,
    UserId,
)
from inkwell.domain.value.common import ValueObject


class CommentFilter(ValueObject):
    """Filter for flat comment listings.

    ``search`` is a case-insensitive substring matched against content,
    guest name and guest email.
    """

    post_id: Optional[PostId] = None
    status: Optional[CommentStatus] = None
    search: Optional[str] = None


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        statuses: Optional[Iterable[CommentStatus]] = None,
    ) -> List[Comment]:
        """Find all comments for a post, oldest first.

        Args:
            post_id: The post ID
            statuses: Only return comments in these statuses (None for all)

        Returns:
            Flat list of comments ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def find_many(
        self,
        comment_filter: CommentFilter,
        sort_by: CommentSortField = CommentSortField.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments matching a filter, sorted and paginated.

        Args:
            comment_filter: Filter to apply
            sort_by: Field to sort on
            direction: Sort direction
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of matching comments
        """
        pass

    @abstractmethod
    async def count(self, comment_filter: Optional[CommentFilter] = None) -> int:
        """Count comments matching a filter (all comments when None)."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        comment_ids: Iterable[CommentId],
        status: CommentStatus,
        moderated_by: UserId,
        moderated_at: datetime,
    ) -> int:
        """Set status and moderation stamp on every existing comment in the set.

        Ids that don't resolve are ignored.

        Returns:
            Number of comments updated
        """
        pass

    @abstractmethod
    async def collect_subtree_ids(
        self, root_ids: Iterable[CommentId]
    ) -> set[CommentId]:
        """Collect the ids of the given comments and all their transitive replies.

        Roots that don't exist are not included.

        Args:
            root_ids: Ids of the comments at the top of each subtree

        Returns:
            Set of existing comment ids to remove
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Iterable[CommentId]) -> int:
        """Delete the given comments in a single batch (hard delete).

        Args:
            comment_ids: Ids to delete

        Returns:
            Number of comments actually deleted
        """
        pass

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Group writes into one unit.

        Leaving the block with an exception undoes every write made inside
        it, while earlier work in the same session is kept.
        """
        pass

    @abstractmethod
    async def count_by_status(self) -> dict[CommentStatus, int]:
        """Count comments per status. Statuses with no comments may be absent."""
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        """Count comments created at or after a point in time."""
        pass
