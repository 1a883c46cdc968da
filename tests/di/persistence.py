"""Mock persistence providers for testing."""

from dishka import Scope, provide

from inkwell.domain.repository import (
    CommentRepository,
    PostRepository,
    RoleRepository,
    UserRepository,
)
from inkwell.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryRoleRepository,
    InMemoryUserRepository,
)
from inkwell.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across requests served by
    one container. Every test builds its own container, which keeps tests
    isolated from each other.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_role_repository(self) -> RoleRepository:
        """Provide in-memory role repository."""
        return InMemoryRoleRepository()

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
