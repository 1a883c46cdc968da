"""Test configuration and fixtures."""

import os

# Must be set before any Settings() is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("COMMENTS__CAPTCHA__BYPASS_TOKEN", "test-bypass-token")

from datetime import datetime  # noqa: E402
from uuid import uuid4  # noqa: E402

import logfire  # noqa: E402

from inkwell.config import AuthSettings  # noqa: E402
from inkwell.domain.model import (  # noqa: E402
    Comment,
    GuestAuthor,
    Post,
    RegisteredAuthor,
    Role,
    User,
)
from inkwell.domain.value import (  # noqa: E402
    CommentId,
    CommentStatus,
    PostId,
    Privilege,
    RoleId,
    UserId,
)
from inkwell.util.jwt import create_token  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)

BYPASS_TOKEN = os.environ["COMMENTS__CAPTCHA__BYPASS_TOKEN"]


def make_role(
    name: str = "member",
    privileges: set[Privilege] | None = None,
    is_superuser: bool = False,
) -> Role:
    """Helper to build a role with the given privileges."""
    return Role(
        id=RoleId(uuid4()),
        name=name,
        privileges=frozenset(p.value for p in (privileges or set())),
        is_superuser=is_superuser,
        created_at=datetime.now(),
    )


def make_user(
    role: Role,
    username: str = "alice",
    is_active: bool = True,
    full_name: str | None = None,
) -> User:
    return User(
        id=UserId(uuid4()),
        username=username,
        email=f"{username}@example.com",
        full_name=full_name,
        role_id=role.id,
        is_active=is_active,
        created_at=datetime.now(),
    )


def make_post(is_published: bool = True, title: str = "Test Post") -> Post:
    return Post(
        id=PostId(uuid4()),
        title=title,
        author_id=UserId(uuid4()),
        is_published=is_published,
        created_at=datetime.now(),
    )


def make_comment(
    post_id: PostId,
    parent_id: CommentId | None = None,
    status: CommentStatus = CommentStatus.APPROVED,
    content: str = "A comment",
    created_at: datetime | None = None,
    guest: bool = False,
    author_id: UserId | None = None,
) -> Comment:
    """Helper to build a comment without going through the service."""
    if guest:
        author = GuestAuthor(name="Guest", email="guest@example.com")
    else:
        author = RegisteredAuthor(user_id=author_id or UserId(uuid4()))
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        parent_id=parent_id,
        author=author,
        content=content,
        status=status,
        ip_address="203.0.113.7",
        user_agent="pytest",
        created_at=created_at or datetime.now(),
    )


def token_for(user: User) -> str:
    """Bearer token for a user, signed with the settings the app uses."""
    return create_token(str(user.id), AuthSettings())
