"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from inkwell.domain.service import UserService
from inkwell.domain.value import UserId
from tests.harness import create_env_fixture, seed_user

unit_env = create_env_fixture()


class TestGetUsersByIds:
    @pytest.mark.asyncio
    async def test_known_users_keyed_by_id(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        alice, _ = await seed_user(unit_env, username="alice")
        bob, _ = await seed_user(unit_env, username="bob")

        # Act
        users = await user_service.get_users_by_ids([alice.id, bob.id, alice.id])

        # Assert
        assert users == {alice.id: alice, bob.id: bob}

    @pytest.mark.asyncio
    async def test_unknown_ids_are_left_out(self, unit_env):
        user_service = await unit_env.get(UserService)
        alice, _ = await seed_user(unit_env)

        users = await user_service.get_users_by_ids([alice.id, UserId(uuid4())])

        assert list(users) == [alice.id]

    @pytest.mark.asyncio
    async def test_no_ids(self, unit_env):
        user_service = await unit_env.get(UserService)

        assert await user_service.get_users_by_ids([]) == {}
