"""Unit tests for GetCommentsUseCase."""

import sys
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from inkwell.application.usecase.comment import GetCommentsRequest, GetCommentsUseCase
from inkwell.domain.error import NotFoundError
from inkwell.domain.repository import CommentRepository, PostRepository, UserRepository
from inkwell.domain.value import CommentStatus, Privilege
from tests.conftest import make_comment, make_post, make_role, make_user
from tests.harness import create_env_fixture, seed_user

unit_env = create_env_fixture()


async def _seed_thread(env):
    """Post with an approved root, an approved reply and a pending root."""
    post = await (await env.get(PostRepository)).save(make_post())
    comment_repo = await env.get(CommentRepository)
    root = await comment_repo.save(make_comment(post.id))
    reply = await comment_repo.save(make_comment(post.id, parent_id=root.id))
    pending = await comment_repo.save(
        make_comment(post.id, status=CommentStatus.PENDING, guest=True)
    )
    return post, root, reply, pending


class TestPublicView:
    @pytest.mark.asyncio
    async def test_visitor_sees_approved_tree(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post, root, reply, _ = await _seed_thread(unit_env)

        # Act
        response = await use_case.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        assert [c.id for c in response.comments] == [str(root.id)]
        assert [r.id for r in response.comments[0].replies] == [str(reply.id)]
        assert response.pagination.total_comments == 1
        assert response.pagination.current_page == 1
        assert response.pagination.limit == 20

    @pytest.mark.asyncio
    async def test_status_filter_ignored_for_visitors(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post, root, _, _ = await _seed_thread(unit_env)

        response = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), status="pending")
        )

        assert [c.id for c in response.comments] == [str(root.id)]

    @pytest.mark.asyncio
    async def test_unpublished_post_hidden_from_visitors(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        draft = await (await unit_env.get(PostRepository)).save(
            make_post(is_published=False)
        )

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentsRequest(post_id=str(draft.id)))

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post, _, _, _ = await _seed_thread(unit_env)

        response = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), limit=500)
        )

        assert response.pagination.limit == 50


class TestModeratorView:
    @pytest.mark.asyncio
    async def test_all_is_flat_with_private_fields(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post, _, _, pending = await _seed_thread(unit_env)
        _, token = await seed_user(unit_env, {Privilege.MANAGE_COMMENTS})

        # Act
        response = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), status="all", auth_token=token)
        )

        # Assert
        assert response.pagination.total_comments == 3
        assert all(c.replies == [] for c in response.comments)
        guest = next(c for c in response.comments if c.id == str(pending.id))
        assert guest.author.email == "guest@example.com"
        assert guest.ip_address == "203.0.113.7"

    @pytest.mark.asyncio
    async def test_single_status_tree(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post, _, _, pending = await _seed_thread(unit_env)
        _, token = await seed_user(unit_env, {Privilege.MANAGE_COMMENTS})

        response = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), status="pending", auth_token=token)
        )

        assert [c.id for c in response.comments] == [str(pending.id)]

    @pytest.mark.asyncio
    async def test_moderator_sees_unpublished_post(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        draft = await (await unit_env.get(PostRepository)).save(
            make_post(is_published=False)
        )
        _, token = await seed_user(unit_env, is_superuser=True)

        response = await use_case.execute(
            GetCommentsRequest(post_id=str(draft.id), auth_token=token)
        )

        assert response.comments == []

    @pytest.mark.asyncio
    async def test_moderator_missing_post(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        _, token = await seed_user(unit_env, is_superuser=True)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetCommentsRequest(post_id=str(uuid4()), auth_token=token)
            )


class TestDeepThreads:
    @pytest.mark.asyncio
    async def test_replies_past_display_depth_are_flattened(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post = await (await unit_env.get(PostRepository)).save(make_post())
        comment_repo = await unit_env.get(CommentRepository)
        start = datetime.now() - timedelta(days=1)
        chain = []
        parent_id = None
        for i in range(sys.getrecursionlimit() + 50):
            comment = await comment_repo.save(
                make_comment(
                    post.id,
                    parent_id=parent_id,
                    created_at=start + timedelta(seconds=i),
                )
            )
            chain.append(comment)
            parent_id = comment.id

        # Act
        response = await use_case.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        item = response.comments[0]
        for expected in chain[:10]:
            assert item.id == str(expected.id)
            assert len(item.replies) == 1
            item = item.replies[0]
        assert item.id == str(chain[10].id)
        flat = item.replies
        assert [c.id for c in flat] == [str(c.id) for c in chain[11:]]
        assert all(c.replies == [] for c in flat)
        assert flat[-1].parent_id == str(chain[-2].id)

        # The whole response still serializes
        dumped = response.model_dump(by_alias=True)
        assert dumped["pagination"]["totalComments"] == 1


class TestAuthorNames:
    @pytest.mark.asyncio
    async def test_registered_author_shows_username_and_display_name(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post = await (await unit_env.get(PostRepository)).save(make_post())
        role = make_role(name="writer-role")
        user = await (await unit_env.get(UserRepository)).save(
            make_user(role, username="writer", full_name="Wendy Writer")
        )
        plain, _ = await seed_user(unit_env, username="plain")
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(post.id, author_id=user.id))
        await comment_repo.save(make_comment(post.id, author_id=plain.id))

        # Act
        response = await use_case.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        authors = {c.author.user_id: c.author for c in response.comments}
        assert authors[str(user.id)].name == "writer"
        assert authors[str(user.id)].display_name == "Wendy Writer"
        assert authors[str(user.id)].email is None
        assert authors[str(plain.id)].display_name == "plain"

    @pytest.mark.asyncio
    async def test_unknown_registered_author_has_no_name(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post = await (await unit_env.get(PostRepository)).save(make_post())
        comment = await (await unit_env.get(CommentRepository)).save(
            make_comment(post.id)
        )

        response = await use_case.execute(GetCommentsRequest(post_id=str(post.id)))

        assert response.comments[0].id == str(comment.id)
        assert response.comments[0].author.kind == "registered"
        assert response.comments[0].author.name is None

    @pytest.mark.asyncio
    async def test_moderator_sees_author_email(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post = await (await unit_env.get(PostRepository)).save(make_post())
        writer, _ = await seed_user(unit_env, username="writer")
        await (await unit_env.get(CommentRepository)).save(
            make_comment(post.id, author_id=writer.id)
        )
        _, token = await seed_user(unit_env, is_superuser=True, username="mod")

        response = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), status="all", auth_token=token)
        )

        assert response.comments[0].author.email == "writer@example.com"
