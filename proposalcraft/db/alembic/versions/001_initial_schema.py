"""Initial schema - users, organizations, documents, proposals, sections, chat, memory

Revision ID: 001
Revises:
Create Date: 2026-10-19

Every child table references its parent with ON DELETE CASCADE so removing
a user, organization or proposal never leaves reachable orphans.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps(*, updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        )
    ]
    if updated:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.func.now(),
                nullable=False,
            )
        )
    return columns


def upgrade() -> None:
    """Create all tables and indexes."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.Text(), nullable=False, unique=True),
        sa.Column("full_name", sa.Text(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_organization_user", "organizations", ["user_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "organization_id",
            sa.Integer(),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("filename", sa.Text(), nullable=False),
        sa.Column("file_path", sa.Text(), nullable=False),
        sa.Column("file_type", sa.Text(), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("upload_status", sa.Text(), nullable=False, server_default="pending"),
        *_timestamps(),
        sa.UniqueConstraint("organization_id", "file_path", name="uq_document_org_path"),
    )
    op.create_index("idx_document_org", "documents", ["organization_id", "created_at"])

    op.create_table(
        "proposals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "organization_id",
            sa.Integer(),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default="planning"),
        sa.Column("phase", sa.Text(), nullable=False, server_default="planning"),
        *_timestamps(),
    )
    op.create_index("idx_proposal_user", "proposals", ["user_id", "created_at"])

    op.create_table(
        "proposal_sections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "proposal_id",
            sa.Integer(),
            sa.ForeignKey("proposals.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index(
        "idx_section_proposal_order", "proposal_sections", ["proposal_id", "order_index"]
    )

    op.create_table(
        "chat_messages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "proposal_id",
            sa.Integer(),
            sa.ForeignKey("proposals.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("message_type", sa.Text(), nullable=False, server_default="chat"),
        *_timestamps(updated=False),
    )
    op.create_index(
        "idx_message_proposal_created", "chat_messages", ["proposal_id", "created_at"]
    )

    op.create_table(
        "ai_memory",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "proposal_id",
            sa.Integer(),
            sa.ForeignKey("proposals.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("memory_type", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("source", sa.Text(), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index("idx_memory_proposal_created", "ai_memory", ["proposal_id", "created_at"])


def downgrade() -> None:
    """Drop all tables (children first)."""
    op.drop_index("idx_memory_proposal_created", table_name="ai_memory")
    op.drop_table("ai_memory")
    op.drop_index("idx_message_proposal_created", table_name="chat_messages")
    op.drop_table("chat_messages")
    op.drop_index("idx_section_proposal_order", table_name="proposal_sections")
    op.drop_table("proposal_sections")
    op.drop_index("idx_proposal_user", table_name="proposals")
    op.drop_table("proposals")
    op.drop_index("idx_document_org", table_name="documents")
    op.drop_table("documents")
    op.drop_index("idx_organization_user", table_name="organizations")
    op.drop_table("organizations")
    op.drop_table("users")
