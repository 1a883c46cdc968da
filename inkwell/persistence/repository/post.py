"""PostgreSQL implementation of Post repository."""

from collections.abc import Iterable
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.model import Post
from inkwell.domain.repository import PostRepository
from inkwell.domain.value import PostId
from inkwell.persistence.mappers import post_to_dict, row_to_post
from inkwell.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        """Find many posts in one query."""
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = select(posts_table).where(posts_table.c.id.in_(ids))
        result = await self.session.execute(stmt)
        posts = [row_to_post(row._asdict()) for row in result.fetchall()]
        return {post.id: post for post in posts}

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        values = post_to_dict(post)
        if await self.find_by_id(post.id):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .values(**values)
            )
        else:
            stmt = posts_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return post
