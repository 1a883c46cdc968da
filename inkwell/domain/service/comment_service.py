"""Comment domain service."""

import re
from collections.abc import Iterable
from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from inkwell.domain.error import NotFoundError, UnavailableError, ValidationError
from inkwell.domain.model.comment import (
    MAX_CONTENT_LENGTH,
    MAX_GUEST_EMAIL_LENGTH,
    MAX_GUEST_NAME_LENGTH,
    MAX_GUEST_WEBSITE_LENGTH,
    Comment,
    CommentNode,
    GuestAuthor,
    RegisteredAuthor,
)
from inkwell.domain.model.page import Page
from inkwell.domain.model.stats import CommentStats
from inkwell.domain.repository import CommentFilter, CommentRepository
from inkwell.domain.value import (
    CommentId,
    CommentSortField,
    CommentStatus,
    PostId,
    SortDirection,
    UserId,
)
from inkwell.domain.value.common import ValueObject

from .base import Service
from .content_safety import ContentSafetyChecker

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class BulkDeleteResult(ValueObject):
    """Outcome of a bulk delete.

    ``deleted_count`` covers every removed comment, targets and replies alike.
    """

    deleted_count: int
    replies_deleted: int


class CommentService(Service):
    """Domain service for the comment store.

    Owns creation rules (authorship, initial status, content checks), tree
    assembly, moderation transitions and cascade deletion. Privilege checks
    happen before these methods are called.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_safety: ContentSafetyChecker,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            content_safety: XSS-safety checker for submitted text
        """
        self.comment_repository = comment_repository
        self.content_safety = content_safety

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def _clean_content(self, content: str | None) -> str:
        text = (content or "").strip()
        if not text:
            raise ValidationError("Content is required")
        if len(text) > MAX_CONTENT_LENGTH:
            raise ValidationError(
                f"Comment must be between 1 and {MAX_CONTENT_LENGTH} characters"
            )
        if not self.content_safety.is_safe(text):
            raise ValidationError("Comment contains invalid content")
        return text

    def _guest_author(
        self, name: str | None, email: str | None, website: str | None
    ) -> GuestAuthor:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        website = (website or "").strip() or None

        if not name or not email:
            raise ValidationError("Name and email are required for anonymous comments")
        if len(name) > MAX_GUEST_NAME_LENGTH:
            raise ValidationError(
                f"Name must be at most {MAX_GUEST_NAME_LENGTH} characters"
            )
        if not self.content_safety.is_safe(name):
            raise ValidationError("Name contains invalid content")
        if len(email) > MAX_GUEST_EMAIL_LENGTH or not _EMAIL_RE.match(email):
            raise ValidationError("A valid email address is required")
        if website is not None:
            if len(website) > MAX_GUEST_WEBSITE_LENGTH:
                raise ValidationError(
                    f"Website must be at most {MAX_GUEST_WEBSITE_LENGTH} characters"
                )
            if not self.content_safety.is_safe(website):
                raise ValidationError("Website contains invalid content")

        return GuestAuthor(name=name, email=email, website=website)

    async def create_comment(
        self,
        post_id: PostId,
        content: str | None,
        author_id: UserId | None = None,
        guest_name: str | None = None,
        guest_email: str | None = None,
        guest_website: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Comment:
        """Create a root comment on a post.

        A registered author (``author_id`` set) is trusted and the comment is
        approved immediately. Otherwise the guest fields are required and the
        comment waits in the moderation queue as pending.

        The caller is responsible for checking the post exists and is visible.

        Raises:
            ValidationError: Content or guest details malformed
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            registered=author_id is not None,
        ):
            text = self._clean_content(content)

            if author_id is not None:
                author = RegisteredAuthor(user_id=author_id)
                status = CommentStatus.APPROVED
            else:
                author = self._guest_author(guest_name, guest_email, guest_website)
                status = CommentStatus.PENDING

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                parent_id=None,
                author=author,
                content=text,
                status=status,
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                status=saved.status.value,
            )
            return saved

    async def reply(
        self,
        parent_id: CommentId,
        content: str | None,
        author_id: UserId,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Comment:
        """Reply to an existing comment as a registered user.

        The reply inherits the parent's post and is approved immediately.

        Raises:
            ValidationError: Content malformed
            NotFoundError: Parent comment does not exist
        """
        with logfire.span(
            "comment_service.reply",
            parent_id=str(parent_id),
            author_id=str(author_id),
        ):
            text = self._clean_content(content)

            parent = await self.comment_repository.find_by_id(parent_id)
            if parent is None:
                logfire.warn("Parent comment not found", parent_id=str(parent_id))
                raise NotFoundError("Parent comment", str(parent_id))

            reply = Comment(
                id=CommentId(uuid4()),
                post_id=parent.post_id,
                parent_id=parent.id,
                author=RegisteredAuthor(user_id=author_id),
                content=text,
                status=CommentStatus.APPROVED,
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(reply)
            logfire.info(
                "Reply created",
                comment_id=str(saved.id),
                parent_id=str(parent_id),
                post_id=str(saved.post_id),
            )
            return saved

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_tree(
        self, post_id: PostId, visible_statuses: Iterable[CommentStatus]
    ) -> list[CommentNode]:
        """Assemble the visible comment forest of a post.

        Root comments come newest first; replies under each parent come
        oldest first so a thread reads chronologically. A reply whose parent
        is not visible is left out together with its own subtree.
        """
        statuses = frozenset(visible_statuses)
        with logfire.span(
            "comment_service.get_tree",
            post_id=str(post_id),
            statuses=sorted(s.value for s in statuses),
        ):
            comments = await self.comment_repository.find_by_post(post_id, statuses)
            forest = build_forest(comments)
            logfire.info(
                "Comment tree assembled",
                post_id=str(post_id),
                comments=len(comments),
                roots=len(forest),
            )
            return forest

    async def get_tree_page(
        self,
        post_id: PostId,
        visible_statuses: Iterable[CommentStatus],
        page: int,
        limit: int,
    ) -> Page[CommentNode]:
        """Visible comment forest, paginated over root comments."""
        forest = await self.get_tree(post_id, visible_statuses)
        offset = Page.offset_for(page, limit)
        return Page[CommentNode](
            items=forest[offset : offset + limit],
            total=len(forest),
            page=page,
            limit=limit,
        )

    async def list_comments(
        self,
        comment_filter: CommentFilter,
        page: int,
        limit: int,
        sort_by: CommentSortField = CommentSortField.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
    ) -> Page[Comment]:
        """Flat, filtered and sorted comment listing for moderation."""
        with logfire.span(
            "comment_service.list_comments",
            post_id=str(comment_filter.post_id) if comment_filter.post_id else None,
            status=comment_filter.status.value if comment_filter.status else None,
            has_search=bool(comment_filter.search),
            sort_by=sort_by.value,
            direction=direction.value,
            page=page,
            limit=limit,
        ):
            items = await self.comment_repository.find_many(
                comment_filter,
                sort_by=sort_by,
                direction=direction,
                limit=limit,
                offset=Page.offset_for(page, limit),
            )
            total = await self.comment_repository.count(comment_filter)
            return Page[Comment](items=items, total=total, page=page, limit=limit)

    async def get_stats(self) -> CommentStats:
        """Total, last-24h and per-status counts (zero-filled)."""
        with logfire.span("comment_service.get_stats"):
            total = await self.comment_repository.count()
            recent = await self.comment_repository.count_created_since(
                datetime.now() - timedelta(hours=24)
            )
            counts = await self.comment_repository.count_by_status()
            return CommentStats(
                total=total,
                recent_24h=recent,
                by_status={status: counts.get(status, 0) for status in CommentStatus},
            )

    # ------------------------------------------------------------------
    # Moderation
    # ------------------------------------------------------------------

    @staticmethod
    def _check_moderation_status(status: CommentStatus | str) -> CommentStatus:
        try:
            status = CommentStatus(status)
        except ValueError:
            status = None
        if status not in CommentStatus.moderation_targets():
            raise ValidationError(
                "Invalid status. Must be approved, rejected, or spam"
            )
        return status

    async def set_status(
        self,
        comment_id: CommentId,
        status: CommentStatus | str,
        moderator_id: UserId,
    ) -> Comment:
        """Move a comment to a moderation status.

        Any current status may move to approved, rejected or spam.

        Raises:
            ValidationError: Target status is not a moderation status
            NotFoundError: Comment does not exist
        """
        status = self._check_moderation_status(status)
        with logfire.span(
            "comment_service.set_status",
            comment_id=str(comment_id),
            status=status.value,
            moderator_id=str(moderator_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found for moderation", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            updated = comment.model_copy(
                update={
                    "status": status,
                    "moderated_by": moderator_id,
                    "moderated_at": datetime.now(),
                }
            )
            saved = await self.comment_repository.save(updated)
            logfire.info(
                "Comment moderated",
                comment_id=str(comment_id),
                previous_status=comment.status.value,
                status=status.value,
            )
            return saved

    async def bulk_set_status(
        self,
        comment_ids: Iterable[CommentId],
        status: CommentStatus | str,
        moderator_id: UserId,
    ) -> int:
        """Set the status of many comments at once, skipping unknown ids.

        Returns:
            Number of comments updated
        """
        status = self._check_moderation_status(status)
        ids = set(comment_ids)
        with logfire.span(
            "comment_service.bulk_set_status",
            requested=len(ids),
            status=status.value,
            moderator_id=str(moderator_id),
        ):
            updated = await self.comment_repository.update_status(
                ids, status, moderated_by=moderator_id, moderated_at=datetime.now()
            )
            logfire.info(
                "Bulk status update",
                requested=len(ids),
                updated=updated,
                status=status.value,
            )
            return updated

    async def _delete_subtrees(self, root_ids: set[CommentId]) -> set[CommentId]:
        """Remove the given comments and all their replies as one batch.

        Collection and removal run as one repository unit, so an incomplete
        cascade leaves every comment in place.

        Returns:
            Ids of every removed comment

        Raises:
            UnavailableError: Fewer comments were removed than collected
        """
        async with self.comment_repository.atomic():
            doomed = await self.comment_repository.collect_subtree_ids(root_ids)
            if not doomed:
                return doomed

            removed = await self.comment_repository.delete_many(doomed)
            if removed != len(doomed):
                logfire.error(
                    "Cascade delete incomplete",
                    expected=len(doomed),
                    removed=removed,
                )
                raise UnavailableError("comment store", "cascade delete incomplete")
            return doomed

    async def delete_comment(self, comment_id: CommentId) -> int:
        """Delete a comment and every transitive reply.

        Returns:
            Total number of comments removed (the comment plus its replies)

        Raises:
            NotFoundError: Comment does not exist
            UnavailableError: The cascade could not be completed
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found for deletion", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            removed = await self._delete_subtrees({comment_id})
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                removed=len(removed),
            )
            return len(removed)

    async def bulk_delete(self, comment_ids: Iterable[CommentId]) -> BulkDeleteResult:
        """Delete many comments with their replies, skipping unknown ids."""
        targets = set(comment_ids)
        with logfire.span("comment_service.bulk_delete", requested=len(targets)):
            removed = await self._delete_subtrees(targets)
            deleted_targets = len(targets & removed)
            result = BulkDeleteResult(
                deleted_count=len(removed),
                replies_deleted=len(removed) - deleted_targets,
            )
            logfire.info(
                "Bulk delete",
                requested=len(targets),
                deleted=result.deleted_count,
                replies_deleted=result.replies_deleted,
            )
            return result


def build_forest(comments: Iterable[Comment]) -> list[CommentNode]:
    """Group a flat comment list into threads by parent_id.

    Roots newest first, replies oldest first. Replies whose parent is absent
    from ``comments`` are dropped with their descendants. Threads have no
    depth limit, so nodes are built bottom-up from an explicit stack.
    """
    children: dict[CommentId | None, list[Comment]] = {}
    for comment in comments:
        children.setdefault(comment.parent_id, []).append(comment)
    for siblings in children.values():
        siblings.sort(key=lambda c: c.created_at)

    roots = list(reversed(children.get(None, [])))
    built: dict[CommentId, CommentNode] = {}
    # (comment, replies_built) pairs; a node is built once its replies are
    stack = [(root, False) for root in roots]
    while stack:
        comment, replies_built = stack.pop()
        replies = children.get(comment.id, [])
        if replies_built:
            built[comment.id] = CommentNode(
                comment=comment, replies=[built.pop(r.id) for r in replies]
            )
        else:
            stack.append((comment, True))
            stack.extend((reply, False) for reply in replies)

    return [built[root.id] for root in roots]
