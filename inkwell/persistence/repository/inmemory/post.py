"""In-memory post repository for testing."""

from collections.abc import Iterable
from typing import Optional

from inkwell.domain.model.post import Post
from inkwell.domain.repository.post import PostRepository
from inkwell.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        return self._posts.get(post_id)

    async def find_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        return {i: self._posts[i] for i in set(post_ids) if i in self._posts}

    async def save(self, post: Post) -> Post:
        self._posts[post.id] = post
        return post
