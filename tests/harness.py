"""Test harness for unit, integration and E2E tests.

Integration tests assume PostgreSQL is running and migrated.
Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from inkwell.domain.model import Role, User
from inkwell.domain.repository import RoleRepository, UserRepository
from inkwell.domain.value import Privilege
from inkwell.util.di import Component
from tests.conftest import make_role, make_user, token_for
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_comment(unit_env):
            service = await unit_env.get(CommentService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


async def seed_user(
    env,
    privileges: set[Privilege] | None = None,
    is_superuser: bool = False,
    username: str = "alice",
    is_active: bool = True,
) -> tuple[User, str]:
    """Save a user (and a role holding ``privileges``) and return it with a token."""
    role_repo = await env.get(RoleRepository)
    user_repo = await env.get(UserRepository)

    role: Role = await role_repo.save(
        make_role(
            name=f"{username}-role",
            privileges=privileges,
            is_superuser=is_superuser,
        )
    )
    user = await user_repo.save(make_user(role, username=username, is_active=is_active))
    return user, token_for(user)
