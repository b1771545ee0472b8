"""SQLAlchemy table definitions.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the identity side; read for roles)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=True),
    Column("role", String(20), nullable=False, server_default="USER"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

# ============================================================================
# POSTS TABLE (owned by the publishing side; read-only here)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("slug", String(200), nullable=False, unique=True),
    Column("title", String(300), nullable=False),
    Column("published", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_posts_deleted_at", posts_table.c.deleted_at)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("author_name", String(50), nullable=True),
    Column("author_email", String(255), nullable=True),
    Column("author_url", String(200), nullable=True),
    Column("content", Text, nullable=False),
    Column("approved", Boolean, nullable=False, server_default="false"),
    Column("ip_address", String(64), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "(author_id IS NOT NULL AND author_name IS NULL AND author_email IS NULL)"
        " OR (author_id IS NULL AND author_name IS NOT NULL"
        " AND author_email IS NOT NULL)",
        name="single_authorship_mode",
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 1000", name="content_length"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_created_at", comments_table.c.created_at)
Index("idx_comments_deleted_at", comments_table.c.deleted_at)

# ============================================================================
# ACTIVITY LOGS TABLE (audit sink)
# ============================================================================
activity_logs_table = Table(
    "activity_logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "user_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("action", String(50), nullable=False),
    Column("resource", String(50), nullable=False),
    Column("resource_id", String(64), nullable=True),
    Column("details", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_activity_logs_user_id", activity_logs_table.c.user_id)
Index("idx_activity_logs_resource", activity_logs_table.c.resource_id)
