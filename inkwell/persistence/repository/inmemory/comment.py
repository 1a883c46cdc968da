"""In-memory comment repository for testing."""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from inkwell.domain.model.comment import Comment
from inkwell.domain.repository.comment import CommentFilter, CommentRepository
from inkwell.domain.value import (
    CommentId,
    CommentSortField,
    CommentStatus,
    PostId,
    SortDirection,
    UserId,
)

# Same order as the comment_status enum in the database
_STATUS_ORDER = {status: index for index, status in enumerate(CommentStatus)}


def _matches(comment: Comment, comment_filter: CommentFilter) -> bool:
    if comment_filter.post_id is not None and comment.post_id != comment_filter.post_id:
        return False
    if comment_filter.status is not None and comment.status != comment_filter.status:
        return False
    if comment_filter.search:
        term = comment_filter.search.lower()
        fields = [comment.content]
        if comment.is_guest:
            fields += [comment.author.name, comment.author.email]
        if not any(term in field.lower() for field in fields):
            return False
    return True


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        statuses: Optional[Iterable[CommentStatus]] = None,
    ) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        if statuses is not None:
            allowed = set(statuses)
            comments = [c for c in comments if c.status in allowed]

        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_many(
        self,
        comment_filter: CommentFilter,
        sort_by: CommentSortField = CommentSortField.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments matching a filter, sorted and paginated."""
        comments = [c for c in self._comments.values() if _matches(c, comment_filter)]
        reverse = direction == SortDirection.DESC

        # Secondary order: newest first
        comments.sort(key=lambda c: c.created_at, reverse=True)

        if sort_by == CommentSortField.STATUS:
            comments.sort(key=lambda c: _STATUS_ORDER[c.status], reverse=reverse)
        elif sort_by == CommentSortField.MODERATED_AT:
            moderated = [c for c in comments if c.moderated_at is not None]
            unmoderated = [c for c in comments if c.moderated_at is None]
            moderated.sort(key=lambda c: c.moderated_at, reverse=reverse)
            comments = moderated + unmoderated
        else:
            comments.sort(key=lambda c: c.created_at, reverse=reverse)

        return comments[offset : offset + limit]

    async def count(self, comment_filter: Optional[CommentFilter] = None) -> int:
        """Count comments matching a filter."""
        if comment_filter is None:
            return len(self._comments)
        return sum(1 for c in self._comments.values() if _matches(c, comment_filter))

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_status(
        self,
        comment_ids: Iterable[CommentId],
        status: CommentStatus,
        moderated_by: UserId,
        moderated_at: datetime,
    ) -> int:
        """Set status on every existing comment in the set."""
        updated = 0
        for comment_id in set(comment_ids):
            comment = self._comments.get(comment_id)
            if comment is None:
                continue
            self._comments[comment_id] = comment.model_copy(
                update={
                    "status": status,
                    "moderated_by": moderated_by,
                    "moderated_at": moderated_at,
                }
            )
            updated += 1
        return updated

    async def collect_subtree_ids(
        self, root_ids: Iterable[CommentId]
    ) -> set[CommentId]:
        """Collect existing roots and all their transitive replies."""
        collected = {cid for cid in root_ids if cid in self._comments}
        frontier = set(collected)
        while frontier:
            frontier = {
                c.id
                for c in self._comments.values()
                if c.parent_id in frontier and c.id not in collected
            }
            collected |= frontier
        return collected

    async def delete_many(self, comment_ids: Iterable[CommentId]) -> int:
        """Delete the given comments."""
        deleted = 0
        for comment_id in set(comment_ids):
            if self._comments.pop(comment_id, None) is not None:
                deleted += 1
        return deleted

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Restore the previous contents if the block raises."""
        snapshot = dict(self._comments)
        try:
            yield
        except Exception:
            self._comments = snapshot
            raise

    async def count_by_status(self) -> dict[CommentStatus, int]:
        """Count comments per status."""
        counts: dict[CommentStatus, int] = {}
        for comment in self._comments.values():
            counts[comment.status] = counts.get(comment.status, 0) + 1
        return counts

    async def count_created_since(self, since: datetime) -> int:
        """Count comments created at or after ``since``."""
        return sum(1 for c in self._comments.values() if c.created_at >= since)
