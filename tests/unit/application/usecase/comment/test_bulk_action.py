"""Unit tests for BulkActionUseCase."""

from uuid import uuid4

import pytest

from inkwell.application.usecase.comment import BulkActionRequest, BulkActionUseCase
from inkwell.domain.error import ForbiddenError, ValidationError
from inkwell.domain.repository import CommentRepository
from inkwell.domain.value import CommentStatus, PostId, Privilege
from tests.conftest import make_comment
from tests.harness import create_env_fixture, seed_user

unit_env = create_env_fixture()


class TestBulkAction:
    @pytest.mark.asyncio
    async def test_approve_skips_missing_and_malformed_ids(self, unit_env):
        # Arrange
        use_case = await unit_env.get(BulkActionUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        x = await comment_repo.save(make_comment(post_id, status=CommentStatus.PENDING))
        z = await comment_repo.save(make_comment(post_id, status=CommentStatus.PENDING))
        _, token = await seed_user(unit_env, {Privilege.MANAGE_COMMENTS})

        # Act
        response = await use_case.execute(
            BulkActionRequest(
                comment_ids=[str(x.id), str(uuid4()), "not-a-uuid", str(z.id)],
                action="approve",
                auth_token=token,
            )
        )

        # Assert
        assert response.updated_count == 2
        assert response.deleted_count is None
        assert response.message == "Bulk approve completed successfully"
        assert (await comment_repo.find_by_id(x.id)).status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_delete_cascades(self, unit_env):
        # Arrange
        use_case = await unit_env.get(BulkActionUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        root = await comment_repo.save(make_comment(post_id))
        await comment_repo.save(make_comment(post_id, parent_id=root.id))
        _, token = await seed_user(unit_env, {Privilege.MANAGE_COMMENTS})

        # Act
        response = await use_case.execute(
            BulkActionRequest(comment_ids=[str(root.id)], action="delete", auth_token=token)
        )

        # Assert
        assert response.deleted_count == 2
        assert response.replies_deleted == 1
        assert response.updated_count is None
        assert await comment_repo.count() == 0

    @pytest.mark.asyncio
    async def test_empty_ids_rejected(self, unit_env):
        use_case = await unit_env.get(BulkActionUseCase)
        _, token = await seed_user(unit_env, {Privilege.MANAGE_COMMENTS})

        with pytest.raises(ValidationError, match="Comment IDs array is required"):
            await use_case.execute(
                BulkActionRequest(comment_ids=[], action="approve", auth_token=token)
            )

    @pytest.mark.asyncio
    async def test_unknown_action_rejected(self, unit_env):
        use_case = await unit_env.get(BulkActionUseCase)
        _, token = await seed_user(unit_env, {Privilege.MANAGE_COMMENTS})

        with pytest.raises(ValidationError, match="Invalid action"):
            await use_case.execute(
                BulkActionRequest(
                    comment_ids=[str(uuid4())], action="pin", auth_token=token
                )
            )

    @pytest.mark.asyncio
    async def test_authorization_checked_before_input(self, unit_env):
        """A non-moderator is refused even when the request is malformed."""
        use_case = await unit_env.get(BulkActionUseCase)
        _, token = await seed_user(unit_env, {Privilege.REPLY_COMMENTS})

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                BulkActionRequest(comment_ids=[], action="pin", auth_token=token)
            )
