"""add_pages_and_content

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17

Creates the `pages` table (default-language pages and their translations,
with the per-translation `l10n_mode` override) and the `tt_content` table
of content elements.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "pages",
        sa.Column("uid", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("pid", sa.Integer, nullable=False, server_default="0"),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("sys_language_uid", sa.Integer, nullable=False, server_default="0"),
        sa.Column("l10n_parent", sa.Integer, nullable=False, server_default="0"),
        sa.Column("l10n_mode", sa.String(20), nullable=False, server_default=""),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_pages_uid", "pages", ["uid"])
    op.create_index("ix_pages_pid", "pages", ["pid"])
    # Translation lookup by (default page, language)
    op.create_index(
        "idx_pages_l10n_parent_language",
        "pages",
        ["l10n_parent", "sys_language_uid"],
    )

    op.create_table(
        "tt_content",
        sa.Column("uid", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("pid", sa.Integer, nullable=False, server_default="0"),
        sa.Column("sys_language_uid", sa.Integer, nullable=False, server_default="0"),
        sa.Column("l18n_parent", sa.Integer, nullable=False, server_default="0"),
        sa.Column("header", sa.String(255), nullable=False, server_default=""),
        sa.Column("bodytext", sa.Text, nullable=True),
    )
    op.create_index("ix_tt_content_uid", "tt_content", ["uid"])
    op.create_index(
        "idx_tt_content_pid_language_parent",
        "tt_content",
        ["pid", "sys_language_uid", "l18n_parent"],
    )


def downgrade() -> None:
    op.drop_index("idx_tt_content_pid_language_parent", table_name="tt_content")
    op.drop_index("ix_tt_content_uid", table_name="tt_content")
    op.drop_table("tt_content")
    op.drop_index("idx_pages_l10n_parent_language", table_name="pages")
    op.drop_index("ix_pages_pid", table_name="pages")
    op.drop_index("ix_pages_uid", table_name="pages")
    op.drop_table("pages")
