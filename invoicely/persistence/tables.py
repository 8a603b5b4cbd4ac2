"""SQLAlchemy table definitions for Invoicely.

These match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("display_name", String(100), nullable=False),
    Column("email", String(255), nullable=False),  # Stored lower case
    Column("password_hash", Text, nullable=True),  # NULL for Google-only users
    Column("external_id", String(255), nullable=True),  # Google subject ID
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_users_email"),
    UniqueConstraint("external_id", name="uq_users_external_id"),
    CheckConstraint(
        "password_hash IS NOT NULL OR external_id IS NOT NULL",
        name="ck_users_credential_path",
    ),
)

# ============================================================================
# SESSIONS TABLE
# ============================================================================
sessions_table = Table(
    "sessions",
    metadata,
    Column("id", String(64), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_sessions_user_id", sessions_table.c.user_id)
Index("idx_sessions_expires_at", sessions_table.c.expires_at)
