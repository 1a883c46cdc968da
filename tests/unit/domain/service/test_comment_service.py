"""Unit tests for CommentService."""

import sys
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from inkwell.domain.error import NotFoundError, UnavailableError, ValidationError
from inkwell.domain.model import GuestAuthor, RegisteredAuthor
from inkwell.domain.repository import CommentRepository
from inkwell.domain.service import (
    CommentService,
    PatternContentSafetyChecker,
    build_forest,
)
from inkwell.domain.value import CommentId, CommentStatus, PostId, UserId
from inkwell.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_registered_author_is_approved(self, unit_env):
        """A registered author's comment skips the moderation queue."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        author_id = UserId(uuid4())

        # Act
        result = await comment_service.create_comment(
            post_id=post_id, content="  Nice post  ", author_id=author_id
        )

        # Assert
        assert result.status == CommentStatus.APPROVED
        assert result.author == RegisteredAuthor(user_id=author_id)
        assert result.content == "Nice post"
        assert result.parent_id is None
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_guest_author_is_pending(self, unit_env):
        """Guest comments wait for moderation and keep normalized details."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act
        result = await comment_service.create_comment(
            post_id=PostId(uuid4()),
            content="Hello",
            guest_name=" Jane ",
            guest_email="Jane@Example.COM",
            guest_website="https://jane.example",
            ip_address="198.51.100.1",
            user_agent="Mozilla/5.0",
        )

        # Assert
        assert result.status == CommentStatus.PENDING
        assert isinstance(result.author, GuestAuthor)
        assert result.author.name == "Jane"
        assert result.author.email == "jane@example.com"
        assert result.author.website == "https://jane.example"
        assert result.ip_address == "198.51.100.1"

    @pytest.mark.asyncio
    async def test_guest_without_email_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="Name and email are required"):
            await comment_service.create_comment(
                post_id=PostId(uuid4()), content="Hello", guest_name="Jane"
            )

    @pytest.mark.asyncio
    async def test_guest_with_malformed_email_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="valid email"):
            await comment_service.create_comment(
                post_id=PostId(uuid4()),
                content="Hello",
                guest_name="Jane",
                guest_email="not-an-email",
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", None])
    async def test_blank_content_rejected(self, unit_env, content):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="Content is required"):
            await comment_service.create_comment(
                post_id=PostId(uuid4()), content=content, author_id=UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_content_length_boundary(self, unit_env):
        """1000 characters is accepted, 1001 is not."""
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())

        accepted = await comment_service.create_comment(
            post_id=post_id, content="x" * 1000, author_id=UserId(uuid4())
        )
        assert len(accepted.content) == 1000

        with pytest.raises(ValidationError, match="between 1 and 1000"):
            await comment_service.create_comment(
                post_id=post_id, content="x" * 1001, author_id=UserId(uuid4())
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [
            "<script>alert(1)</script>",
            '<img src=x onerror="alert(1)">',
            "click javascript:alert(1)",
        ],
    )
    async def test_unsafe_content_rejected(self, unit_env, content):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        with pytest.raises(ValidationError, match="invalid content"):
            await comment_service.create_comment(
                post_id=PostId(uuid4()), content=content, author_id=UserId(uuid4())
            )

        assert await comment_repo.count() == 0

    @pytest.mark.asyncio
    async def test_plain_comparison_allowed(self, unit_env):
        """A bare angle bracket is not markup."""
        comment_service = await unit_env.get(CommentService)

        result = await comment_service.create_comment(
            post_id=PostId(uuid4()), content="if a < b then", author_id=UserId(uuid4())
        )

        assert result.content == "if a < b then"


class TestReply:
    """Tests for reply method."""

    @pytest.mark.asyncio
    async def test_reply_inherits_post_and_is_approved(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        parent = await comment_repo.save(
            make_comment(post_id, status=CommentStatus.PENDING, guest=True)
        )

        # Act
        reply = await comment_service.reply(
            parent_id=parent.id, content="Thanks!", author_id=UserId(uuid4())
        )

        # Assert
        assert reply.parent_id == parent.id
        assert reply.post_id == post_id
        assert reply.status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.reply(
                parent_id=CommentId(uuid4()), content="Hi", author_id=UserId(uuid4())
            )

        assert exc_info.value.resource == "Parent comment"


class TestBuildForest:
    """Tests for thread assembly."""

    def test_roots_newest_first_replies_oldest_first(self):
        # Arrange
        post_id = PostId(uuid4())
        base = datetime(2024, 1, 1, 12, 0)
        old_root = make_comment(post_id, created_at=base)
        new_root = make_comment(post_id, created_at=base + timedelta(hours=1))
        late_reply = make_comment(
            post_id, parent_id=old_root.id, created_at=base + timedelta(hours=3)
        )
        early_reply = make_comment(
            post_id, parent_id=old_root.id, created_at=base + timedelta(hours=2)
        )

        # Act
        forest = build_forest([late_reply, old_root, early_reply, new_root])

        # Assert
        assert [node.comment.id for node in forest] == [new_root.id, old_root.id]
        assert [node.comment.id for node in forest[1].replies] == [
            early_reply.id,
            late_reply.id,
        ]

    def test_reply_without_visible_parent_is_dropped(self):
        """A reply under a hidden parent disappears with its own subtree."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        orphan = make_comment(post_id, parent_id=CommentId(uuid4()))
        orphan_child = make_comment(post_id, parent_id=orphan.id)

        forest = build_forest([root, orphan, orphan_child])

        assert len(forest) == 1
        assert forest[0].comment.id == root.id
        assert forest[0].replies == []

    def test_deep_nesting(self):
        post_id = PostId(uuid4())
        chain = [make_comment(post_id)]
        for _ in range(5):
            chain.append(make_comment(post_id, parent_id=chain[-1].id))

        forest = build_forest(chain)

        node = forest[0]
        depth = 0
        while node.replies:
            node = node.replies[0]
            depth += 1
        assert depth == 5

    def test_chain_deeper_than_recursion_limit(self):
        post_id = PostId(uuid4())
        base = datetime(2024, 1, 1)
        levels = sys.getrecursionlimit() + 200
        chain = [make_comment(post_id, created_at=base)]
        for i in range(levels):
            chain.append(
                make_comment(
                    post_id,
                    parent_id=chain[-1].id,
                    created_at=base + timedelta(seconds=i + 1),
                )
            )

        forest = build_forest(reversed(chain))

        node = forest[0]
        depth = 0
        while node.replies:
            node = node.replies[0]
            depth += 1
        assert depth == levels
        assert node.comment.id == chain[-1].id


class TestGetTree:
    """Tests for get_tree and get_tree_page."""

    @pytest.mark.asyncio
    async def test_only_requested_statuses_are_visible(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        approved = await comment_repo.save(make_comment(post_id))
        pending = await comment_repo.save(
            make_comment(post_id, status=CommentStatus.PENDING)
        )
        await comment_repo.save(make_comment(post_id, parent_id=pending.id))
        await comment_repo.save(make_comment(PostId(uuid4())))

        # Act
        forest = await comment_service.get_tree(post_id, {CommentStatus.APPROVED})

        # Assert
        assert [node.comment.id for node in forest] == [approved.id]

    @pytest.mark.asyncio
    async def test_long_reply_chain(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        base = datetime(2024, 1, 1)
        levels = sys.getrecursionlimit() + 200
        parent = await comment_repo.save(make_comment(post_id, created_at=base))
        for i in range(levels):
            parent = await comment_repo.save(
                make_comment(
                    post_id,
                    parent_id=parent.id,
                    created_at=base + timedelta(seconds=i + 1),
                )
            )

        # Act
        forest = await comment_service.get_tree(post_id, {CommentStatus.APPROVED})

        # Assert
        assert len(forest) == 1
        node, depth = forest[0], 0
        while node.replies:
            node, depth = node.replies[0], depth + 1
        assert depth == levels

    @pytest.mark.asyncio
    async def test_page_counts_root_comments(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        base = datetime(2024, 1, 1)
        roots = []
        for i in range(5):
            root = await comment_repo.save(
                make_comment(post_id, created_at=base + timedelta(minutes=i))
            )
            roots.append(root)
            await comment_repo.save(
                make_comment(
                    post_id,
                    parent_id=root.id,
                    created_at=base + timedelta(minutes=i, seconds=30),
                )
            )

        # Act
        page = await comment_service.get_tree_page(
            post_id, {CommentStatus.APPROVED}, page=2, limit=2
        )

        # Assert - newest first, so page 2 holds the 3rd and 2nd oldest roots
        assert page.total == 5
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_prev is True
        assert [node.comment.id for node in page.items] == [roots[2].id, roots[1].id]
        assert all(len(node.replies) == 1 for node in page.items)


class TestModeration:
    """Tests for set_status and bulk_set_status."""

    @pytest.mark.asyncio
    async def test_set_status_stamps_moderator(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(
            make_comment(PostId(uuid4()), status=CommentStatus.PENDING, guest=True)
        )
        moderator_id = UserId(uuid4())

        # Act
        result = await comment_service.set_status(
            comment.id, "approved", moderator_id=moderator_id
        )

        # Assert
        assert result.status == CommentStatus.APPROVED
        assert result.moderated_by == moderator_id
        assert result.moderated_at is not None
        assert result.content == comment.content
        assert result.author == comment.author

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["pending", "deleted", "APPROVED"])
    async def test_set_status_rejects_non_moderation_status(self, unit_env, status):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        with pytest.raises(ValidationError, match="Invalid status"):
            await comment_service.set_status(comment.id, status, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_set_status_is_idempotent(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(
            make_comment(PostId(uuid4()), status=CommentStatus.PENDING)
        )
        moderator_id = UserId(uuid4())

        first = await comment_service.set_status(
            comment.id, CommentStatus.REJECTED, moderator_id
        )
        second = await comment_service.set_status(
            comment.id, CommentStatus.REJECTED, moderator_id
        )

        assert first.status == second.status == CommentStatus.REJECTED
        assert second.moderated_by == moderator_id
        assert await comment_repo.count() == 1

    @pytest.mark.asyncio
    async def test_set_status_missing_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.set_status(
                CommentId(uuid4()), CommentStatus.SPAM, UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_bulk_set_status_skips_unknown_ids(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        first = await comment_repo.save(make_comment(post_id, status=CommentStatus.PENDING))
        second = await comment_repo.save(make_comment(post_id, status=CommentStatus.SPAM))

        # Act
        updated = await comment_service.bulk_set_status(
            [first.id, CommentId(uuid4()), second.id],
            CommentStatus.APPROVED,
            moderator_id=UserId(uuid4()),
        )

        # Assert
        assert updated == 2
        assert (await comment_repo.find_by_id(first.id)).status == CommentStatus.APPROVED
        assert (await comment_repo.find_by_id(second.id)).status == CommentStatus.APPROVED


class TestDelete:
    """Tests for cascade deletion."""

    @pytest.mark.asyncio
    async def test_delete_removes_whole_subtree(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        root = await comment_repo.save(make_comment(post_id))
        child = await comment_repo.save(make_comment(post_id, parent_id=root.id))
        await comment_repo.save(make_comment(post_id, parent_id=child.id))
        sibling = await comment_repo.save(make_comment(post_id))

        # Act
        removed = await comment_service.delete_comment(root.id)

        # Assert
        assert removed == 3
        assert await comment_repo.count() == 1
        assert await comment_repo.find_by_id(sibling.id) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_bulk_delete_counts_targets_and_replies(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        first = await comment_repo.save(make_comment(post_id))
        await comment_repo.save(make_comment(post_id, parent_id=first.id))
        second = await comment_repo.save(make_comment(post_id))

        # Act
        result = await comment_service.bulk_delete(
            [first.id, second.id, CommentId(uuid4())]
        )

        # Assert
        assert result.deleted_count == 3
        assert result.replies_deleted == 1
        assert await comment_repo.count() == 0

    @pytest.mark.asyncio
    async def test_incomplete_cascade_raises_unavailable(self):
        """A store that removes fewer rows than collected fails the delete
        and leaves the whole subtree in place."""

        class LossyRepository(InMemoryCommentRepository):
            async def delete_many(self, comment_ids):
                # Removes all but one of the requested comments
                return await super().delete_many(sorted(comment_ids)[1:])

        repo = LossyRepository()
        post_id = PostId(uuid4())
        root = await repo.save(make_comment(post_id))
        reply = await repo.save(make_comment(post_id, parent_id=root.id))
        nested = await repo.save(make_comment(post_id, parent_id=reply.id))

        comment_service = CommentService(repo, PatternContentSafetyChecker())

        with pytest.raises(UnavailableError):
            await comment_service.delete_comment(root.id)

        assert await repo.count() == 3
        for comment in (root, reply, nested):
            assert await repo.find_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_incomplete_bulk_cascade_keeps_every_target(self):
        class LossyRepository(InMemoryCommentRepository):
            async def delete_many(self, comment_ids):
                return await super().delete_many(sorted(comment_ids)[1:])

        repo = LossyRepository()
        post_id = PostId(uuid4())
        first = await repo.save(make_comment(post_id))
        second = await repo.save(make_comment(post_id))

        comment_service = CommentService(repo, PatternContentSafetyChecker())

        with pytest.raises(UnavailableError):
            await comment_service.bulk_delete([first.id, second.id])

        assert await repo.count() == 2


class TestStats:
    @pytest.mark.asyncio
    async def test_stats_zero_filled(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        await comment_repo.save(make_comment(post_id))
        await comment_repo.save(make_comment(post_id, status=CommentStatus.PENDING))
        await comment_repo.save(
            make_comment(post_id, created_at=datetime.now() - timedelta(days=3))
        )

        # Act
        stats = await comment_service.get_stats()

        # Assert
        assert stats.total == 3
        assert stats.recent_24h == 2
        assert stats.by_status[CommentStatus.APPROVED] == 2
        assert stats.by_status[CommentStatus.PENDING] == 1
        assert stats.by_status[CommentStatus.REJECTED] == 0
        assert stats.by_status[CommentStatus.SPAM] == 0
