"""Shared comment views and input parsing for comment use cases."""

from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from typing import Literal
from uuid import UUID

from inkwell.application.usecase.base import WireModel
from inkwell.config import PaginationSettings
from inkwell.domain.error import ValidationError
from inkwell.domain.model import Comment, CommentNode, GuestAuthor, Page, Post, User
from inkwell.domain.service import PostService, UserService
from inkwell.domain.value import CommentId, CommentStatus, PostId, UserId


class AuthorView(WireModel):
    """Comment author as shown to clients.

    ``display_name`` is what a thread shows: the guest's name, or a
    registered user's full name falling back to the username.
    """

    kind: Literal["registered", "guest"]
    user_id: str | None = None
    name: str | None = None
    display_name: str | None = None
    website: str | None = None
    # Moderators only
    email: str | None = None


class CommentItem(WireModel):
    """Comment in a response."""

    id: str
    post_id: str
    parent_id: str | None
    content: str
    status: CommentStatus
    author: AuthorView
    created_at: datetime
    moderated_by: str | None = None
    moderated_at: datetime | None = None
    # Moderators only
    moderated_by_name: str | None = None
    post_title: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    replies: list["CommentItem"] = []


class PaginationInfo(WireModel):
    current_page: int
    total_pages: int
    total_comments: int
    limit: int
    has_next: bool
    has_prev: bool


class CommentReferences:
    """Users and posts a batch of comments points at, loaded in one go."""

    def __init__(
        self,
        users: Mapping[UserId, User] | None = None,
        posts: Mapping[PostId, Post] | None = None,
    ) -> None:
        self.users = dict(users or {})
        self.posts = dict(posts or {})

    @classmethod
    async def load(
        cls,
        comments: Iterable[Comment],
        user_service: UserService,
        post_service: PostService | None = None,
    ) -> "CommentReferences":
        """Resolve registered authors and moderators, plus posts when asked."""
        comments = list(comments)
        user_ids: set[UserId] = set()
        for comment in comments:
            if not comment.is_guest:
                user_ids.add(comment.author.user_id)
            if comment.moderated_by is not None:
                user_ids.add(comment.moderated_by)

        users = await user_service.get_users_by_ids(user_ids)
        posts = (
            await post_service.get_posts_by_ids({c.post_id for c in comments})
            if post_service is not None
            else {}
        )
        return cls(users, posts)


def _author_view(
    comment: Comment, references: CommentReferences, include_private: bool
) -> AuthorView:
    author = comment.author
    if isinstance(author, GuestAuthor):
        return AuthorView(
            kind="guest",
            name=author.name,
            display_name=author.name,
            website=author.website,
            email=author.email if include_private else None,
        )

    user = references.users.get(author.user_id)
    return AuthorView(
        kind="registered",
        user_id=str(author.user_id),
        name=user.username if user else None,
        display_name=user.display_name if user else None,
        email=user.email if user and include_private else None,
    )


def to_comment_item(
    comment: Comment,
    references: CommentReferences | None = None,
    include_private: bool = False,
) -> CommentItem:
    """Build the response view of a comment.

    Guest email and forensic fields are only included for moderators.
    """
    references = references or CommentReferences()
    moderator = None
    post = None
    if include_private:
        if comment.moderated_by is not None:
            moderator = references.users.get(comment.moderated_by)
        post = references.posts.get(comment.post_id)

    return CommentItem(
        id=str(comment.id),
        post_id=str(comment.post_id),
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        content=comment.content,
        status=comment.status,
        author=_author_view(comment, references, include_private),
        created_at=comment.created_at,
        moderated_by=str(comment.moderated_by) if comment.moderated_by else None,
        moderated_at=comment.moderated_at,
        moderated_by_name=moderator.display_name if moderator else None,
        post_title=post.title if post else None,
        ip_address=comment.ip_address if include_private else None,
        user_agent=comment.user_agent if include_private else None,
    )


def iter_forest(nodes: Iterable[CommentNode]) -> Iterator[Comment]:
    """Every comment in a forest, parents before their replies."""
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        yield node.comment
        stack.extend(reversed(node.replies))


def to_tree_items(
    nodes: Iterable[CommentNode],
    max_depth: int,
    references: CommentReferences | None = None,
    include_private: bool = False,
) -> list[CommentItem]:
    """Build response views of a comment forest.

    Replies nest up to ``max_depth`` levels below a root. Anything deeper is
    listed oldest first under its ancestor on the last level, and still
    names the comment it answers in ``parent_id``.
    """
    items: list[CommentItem] = []
    stack = [(node, 0, items) for node in reversed(list(nodes))]
    while stack:
        node, depth, siblings = stack.pop()
        item = to_comment_item(node.comment, references, include_private)
        siblings.append(item)

        if depth < max_depth:
            stack.extend(
                (reply, depth + 1, item.replies) for reply in reversed(node.replies)
            )
        else:
            descendants = sorted(
                iter_forest(node.replies), key=lambda c: c.created_at
            )
            item.replies = [
                to_comment_item(c, references, include_private) for c in descendants
            ]
    return items


def to_pagination(page: Page) -> PaginationInfo:
    return PaginationInfo(
        current_page=page.page,
        total_pages=page.total_pages,
        total_comments=page.total,
        limit=page.limit,
        has_next=page.has_next,
        has_prev=page.has_prev,
    )


def clamp_limit(limit: int | None, settings: PaginationSettings) -> int:
    """Page size, defaulted and capped by configuration."""
    if limit is None:
        return settings.default_limit
    return max(1, min(limit, settings.max_limit))


def parse_uuid(value: str, what: str) -> UUID:
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Invalid {what} ID")


def parse_post_id(value: str) -> PostId:
    return PostId(parse_uuid(value, "post"))


def parse_comment_id(value: str) -> CommentId:
    return CommentId(parse_uuid(value, "comment"))


def parse_status(value: str) -> CommentStatus:
    try:
        return CommentStatus(value)
    except ValueError:
        raise ValidationError(
            "Invalid status. Must be pending, approved, rejected, or spam"
        )
