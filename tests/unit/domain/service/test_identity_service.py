"""Unit tests for IdentityService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from inkwell.config import AuthSettings
from inkwell.domain.error import ForbiddenError, NotAuthenticatedError
from inkwell.domain.service import IdentityService
from inkwell.domain.value import Privilege
from tests.harness import create_env_fixture, seed_user

unit_env = create_env_fixture()


class TestResolve:
    @pytest.mark.asyncio
    async def test_no_credential_is_anonymous(self, unit_env):
        identity_service = await unit_env.get(IdentityService)

        assert await identity_service.resolve(None) is None
        assert await identity_service.resolve("") is None

    @pytest.mark.asyncio
    async def test_valid_token_resolves_role_privileges(self, unit_env):
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        user, token = await seed_user(unit_env, {Privilege.MANAGE_COMMENTS})

        # Act
        principal = await identity_service.resolve(token)

        # Assert
        assert principal.user_id == user.id
        assert principal.username == user.username
        assert principal.privileges == frozenset({"manage_comments"})
        assert principal.is_superuser is False

    @pytest.mark.asyncio
    async def test_garbage_token_rejected(self, unit_env):
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(NotAuthenticatedError, match="Invalid token"):
            await identity_service.resolve("not-a-jwt")

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, unit_env):
        identity_service = await unit_env.get(IdentityService)
        user, _ = await seed_user(unit_env)
        settings = AuthSettings()
        expired = jwt.encode(
            {
                "user_id": str(user.id),
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(NotAuthenticatedError):
            await identity_service.resolve(expired)

    @pytest.mark.asyncio
    async def test_unknown_user_rejected(self, unit_env):
        identity_service = await unit_env.get(IdentityService)
        token = identity_service.jwt_service.create_token(str(uuid4()))

        with pytest.raises(NotAuthenticatedError, match="User not found"):
            await identity_service.resolve(token)

    @pytest.mark.asyncio
    async def test_deactivated_user_forbidden(self, unit_env):
        identity_service = await unit_env.get(IdentityService)
        _, token = await seed_user(unit_env, is_active=False)

        with pytest.raises(ForbiddenError, match="deactivated"):
            await identity_service.resolve(token)


class TestResolveOptional:
    @pytest.mark.asyncio
    async def test_bad_token_degrades_to_anonymous(self, unit_env):
        identity_service = await unit_env.get(IdentityService)

        assert await identity_service.resolve_optional("not-a-jwt") is None

    @pytest.mark.asyncio
    async def test_good_token_still_resolves(self, unit_env):
        identity_service = await unit_env.get(IdentityService)
        user, token = await seed_user(unit_env)

        principal = await identity_service.resolve_optional(token)

        assert principal is not None
        assert principal.user_id == user.id
