"""Post domain service."""

from collections.abc import Iterable

import logfire

from inkwell.domain.error import NotFoundError
from inkwell.domain.model.post import Post
from inkwell.domain.repository import PostRepository
from inkwell.domain.value import PostId

from .base import Service


class PostService(Service):
    """Domain service for the post lookups comments depend on."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def save_post(self, post: Post) -> Post:
        with logfire.span("post_service.save_post", post_id=str(post.id)):
            saved = await self.post_repository.save(post)
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_posts_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        """Batch-load posts, keyed by ID."""
        ids = set(post_ids)
        if not ids:
            return {}
        with logfire.span("post_service.get_posts_by_ids", requested=len(ids)):
            return await self.post_repository.find_by_ids(ids)

    async def get_visible_post(self, post_id: PostId) -> Post:
        """Get a post that is open to the public.

        Unpublished posts are reported as missing so their existence
        doesn't leak.

        Raises:
            NotFoundError: Post missing or not published
        """
        post = await self.get_post_by_id(post_id)
        if post is None or not post.is_published:
            raise NotFoundError("Post", str(post_id))
        return post
