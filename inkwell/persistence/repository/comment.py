"""PostgreSQL implementation of Comment repository."""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, List, Optional

import logfire
from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.error import UnavailableError
from inkwell.domain.model import Comment
from inkwell.domain.repository import CommentFilter, CommentRepository
from inkwell.domain.value import (
    CommentId,
    CommentSortField,
    CommentStatus,
    PostId,
    SortDirection,
    UserId,
)
from inkwell.persistence.mappers import comment_to_dict, row_to_comment
from inkwell.persistence.tables import comments_table

_SORT_COLUMNS = {
    CommentSortField.CREATED_AT: comments_table.c.created_at,
    CommentSortField.MODERATED_AT: comments_table.c.moderated_at,
    CommentSortField.STATUS: comments_table.c.status,
}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Driver failures surface as ``UnavailableError`` so the request-scoped
    session rolls back and the API answers with a gateway error.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any) -> Any:
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("Comment query failed", error=str(e))
            if not self.session.in_nested_transaction():
                # Postgres aborts the transaction; nothing after this can commit
                await self.session.rollback()
            raise UnavailableError("database", str(e)) from e

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Run the block inside a SAVEPOINT, released on success."""
        try:
            async with self.session.begin_nested():
                yield
        except SQLAlchemyError as e:
            logfire.error("Comment savepoint failed", error=str(e))
            raise UnavailableError("database", str(e)) from e

    def _apply_filter(self, stmt: Select, comment_filter: CommentFilter) -> Select:
        if comment_filter.post_id is not None:
            stmt = stmt.where(comments_table.c.post_id == comment_filter.post_id)
        if comment_filter.status is not None:
            stmt = stmt.where(comments_table.c.status == comment_filter.status.value)
        if comment_filter.search:
            pattern = _like_pattern(comment_filter.search)
            stmt = stmt.where(
                or_(
                    comments_table.c.content.ilike(pattern, escape="\\"),
                    comments_table.c.guest_name.ilike(pattern, escape="\\"),
                    comments_table.c.guest_email.ilike(pattern, escape="\\"),
                )
            )
        return stmt

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        statuses: Optional[Iterable[CommentStatus]] = None,
    ) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        stmt = select(comments_table).where(comments_table.c.post_id == post_id)

        if statuses is not None:
            stmt = stmt.where(
                comments_table.c.status.in_([s.value for s in statuses])
            )

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_many(
        self,
        comment_filter: CommentFilter,
        sort_by: CommentSortField = CommentSortField.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments matching a filter, sorted and paginated."""
        column = _SORT_COLUMNS[sort_by]
        order = column.asc() if direction == SortDirection.ASC else column.desc()

        stmt = (
            self._apply_filter(select(comments_table), comment_filter)
            # Unmoderated comments sort after moderated ones either way
            .order_by(
                order.nulls_last(),
                comments_table.c.created_at.desc(),
                comments_table.c.id,
            )
            .limit(limit)
            .offset(offset)
        )

        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count(self, comment_filter: Optional[CommentFilter] = None) -> int:
        """Count comments matching a filter."""
        stmt = select(func.count()).select_from(comments_table)
        if comment_filter is not None:
            stmt = self._apply_filter(stmt, comment_filter)
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Only moderation fields change after creation, so an update writes
        just those.
        """
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(
                    status=comment.status.value,
                    moderated_by=comment.moderated_by,
                    moderated_at=comment.moderated_at,
                )
            )
        else:
            stmt = comments_table.insert().values(**comment_to_dict(comment))

        await self._execute(stmt)
        await self.session.flush()

        return await self.find_by_id(comment.id) or comment

    async def update_status(
        self,
        comment_ids: Iterable[CommentId],
        status: CommentStatus,
        moderated_by: UserId,
        moderated_at: datetime,
    ) -> int:
        """Set status on every existing comment in the set."""
        ids = list(comment_ids)
        if not ids:
            return 0

        stmt = (
            update(comments_table)
            .where(comments_table.c.id.in_(ids))
            .values(
                status=status.value,
                moderated_by=moderated_by,
                moderated_at=moderated_at,
            )
        )
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def collect_subtree_ids(
        self, root_ids: Iterable[CommentId]
    ) -> set[CommentId]:
        """Collect roots and transitive replies with a recursive CTE."""
        ids = list(root_ids)
        if not ids:
            return set()

        subtree = (
            select(comments_table.c.id)
            .where(comments_table.c.id.in_(ids))
            .cte("subtree", recursive=True)
        )
        subtree_alias = subtree.alias()
        replies = comments_table.alias()
        # UNION (not UNION ALL) so a corrupted cycle can't recurse forever
        subtree = subtree.union(
            select(replies.c.id).where(replies.c.parent_id == subtree_alias.c.id)
        )

        result = await self._execute(select(subtree.c.id))
        return {CommentId(row.id) for row in result.fetchall()}

    async def delete_many(self, comment_ids: Iterable[CommentId]) -> int:
        """Delete the given comments in a single statement (hard delete)."""
        ids = list(comment_ids)
        if not ids:
            return 0

        stmt = delete(comments_table).where(comments_table.c.id.in_(ids))
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def count_by_status(self) -> dict[CommentStatus, int]:
        """Count comments per status."""
        stmt = select(comments_table.c.status, func.count()).group_by(
            comments_table.c.status
        )
        result = await self._execute(stmt)
        return {CommentStatus(status): count for status, count in result.fetchall()}

    async def count_created_since(self, since: datetime) -> int:
        """Count comments created at or after ``since``."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.created_at >= since)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0
