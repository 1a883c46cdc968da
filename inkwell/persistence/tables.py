"""SQLAlchemy table definitions for Inkwell.

Core tables only; rows are mapped to pydantic domain models by hand in
``inkwell.persistence.mappers``. They match the schema defined in Alembic
migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, INET, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ROLES TABLE
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(50), nullable=False, unique=True),
    Column("privileges", ARRAY(String(100)), nullable=False, server_default="{}"),
    Column("is_superuser", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("full_name", String(255), nullable=True),
    Column(
        "role_id", UUID, ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False
    ),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_role_id", users_table.c.role_id)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("is_published", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    # Registered author
    Column(
        "author_user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    ),
    # Guest author
    Column("guest_name", String(100), nullable=True),
    Column("guest_email", String(100), nullable=True),
    Column("guest_website", String(200), nullable=True),
    Column("content", Text, nullable=False),
    Column(
        "status",
        Enum(
            "pending",
            "approved",
            "rejected",
            "spam",
            name="comment_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "moderated_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("ip_address", INET, nullable=True),
    Column("user_agent", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(author_user_id IS NULL) <> (guest_name IS NULL)",
        name="exactly_one_author",
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 1000",
        name="content_length",
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_status", comments_table.c.status)
Index("idx_comments_created_at", comments_table.c.created_at.desc())
