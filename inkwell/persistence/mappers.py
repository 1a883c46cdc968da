"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from inkwell.domain.model import Comment, GuestAuthor, Post, RegisteredAuthor, Role, User
from inkwell.domain.value import CommentId, CommentStatus, PostId, RoleId, UserId


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_role(row: Dict[str, Any]) -> Role:
    """Convert database row to Role domain model."""
    return Role(
        id=RoleId(_uuid(row["id"])),
        name=row["name"],
        privileges=frozenset(row.get("privileges") or ()),
        is_superuser=row.get("is_superuser", False),
        created_at=row["created_at"],
    )


def role_to_dict(role: Role) -> Dict[str, Any]:
    return {
        "id": role.id,
        "name": role.name,
        "privileges": sorted(role.privileges),
        "is_superuser": role.is_superuser,
        "created_at": role.created_at,
    }


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        email=row["email"],
        full_name=row.get("full_name"),
        role_id=RoleId(_uuid(row["role_id"])),
        is_active=row.get("is_active", True),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "full_name": user.full_name,
        "role_id": user.role_id,
        "is_active": user.is_active,
        "created_at": user.created_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        author_id=UserId(_uuid(row["author_id"])),
        is_published=row.get("is_published", False),
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    return {
        "id": post.id,
        "title": post.title,
        "author_id": post.author_id,
        "is_published": post.is_published,
        "created_at": post.created_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    The author variant is chosen by which author columns are populated;
    the table's check constraint guarantees exactly one is.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    if row.get("author_user_id") is not None:
        author = RegisteredAuthor(user_id=UserId(_uuid(row["author_user_id"])))
    else:
        author = GuestAuthor(
            name=row["guest_name"],
            email=row["guest_email"],
            website=row.get("guest_website"),
        )

    parent_id = _uuid(row.get("parent_id"))
    moderated_by = _uuid(row.get("moderated_by"))
    ip_address = row.get("ip_address")

    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        parent_id=CommentId(parent_id) if parent_id else None,
        author=author,
        content=row["content"],
        status=CommentStatus(row["status"]),
        moderated_by=UserId(moderated_by) if moderated_by else None,
        moderated_at=row.get("moderated_at"),
        # INET columns come back as ipaddress objects
        ip_address=str(ip_address) if ip_address is not None else None,
        user_agent=row.get("user_agent"),
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    author = comment.author
    is_guest = comment.is_guest
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "author_user_id": None if is_guest else author.user_id,
        "guest_name": author.name if is_guest else None,
        "guest_email": author.email if is_guest else None,
        "guest_website": author.website if is_guest else None,
        "content": comment.content,
        "status": comment.status.value,
        "moderated_by": comment.moderated_by,
        "moderated_at": comment.moderated_at,
        "ip_address": comment.ip_address,
        "user_agent": comment.user_agent,
        "created_at": comment.created_at,
    }
