"""initial_tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:41.208331

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # RESOURCES
    op.create_table(
        "resources",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("description_locked", sa.Boolean(), nullable=False),
        sa.Column("description_source", sa.String(16), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("resource_type", sa.String(32), nullable=True),
        sa.Column("country_programs", sa.JSON(), nullable=False),
        sa.Column("themes", sa.JSON(), nullable=False),
        sa.Column("oc4ids_alignment", sa.JSON(), nullable=False),
        sa.Column("workstreams", sa.JSON(), nullable=False),
        sa.Column("audience", sa.JSON(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("access_level", sa.String(16), nullable=False),
        sa.Column("language", sa.String(8), nullable=False),
        sa.Column("is_translation", sa.Boolean(), nullable=False),
        sa.Column("canonical_id", sa.String(), nullable=True),
        sa.Column("translations", sa.JSON(), nullable=False),
        sa.Column("publication_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_verified", sa.DateTime(timezone=True), nullable=False),
        sa.Column("valid_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("archived_reason", sa.Text(), nullable=True),
        sa.Column("clicks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_clicked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ai_citations", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("embedding", sa.JSON(none_as_null=True), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("source", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(), nullable=False),
        sa.Column("search_text", sa.Text(), nullable=False, server_default=""),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
        sa.UniqueConstraint("url"),
    )
    op.create_index("idx_resources_status", "resources", ["status"])
    op.create_index("idx_resources_publication_date", "resources", ["publication_date"])
    op.create_index("idx_resources_clicks", "resources", ["clicks"])
    op.create_index("idx_resources_language", "resources", ["language"])
    op.create_index("idx_resources_resource_type", "resources", ["resource_type"])

    # RESOURCE TERMS
    op.create_table(
        "resource_terms",
        sa.Column("resource_id", sa.String(), nullable=False),
        sa.Column("field", sa.String(32), nullable=False),
        sa.Column("value", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("resource_id", "field", "value"),
        sa.ForeignKeyConstraint(["resource_id"], ["resources.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_resource_terms_field_value", "resource_terms", ["field", "value"])

    # RESOURCE STATUS HISTORY
    op.create_table(
        "resource_status_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("resource_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("changed_by", sa.String(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["resource_id"], ["resources.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "idx_resource_status_history_resource",
        "resource_status_history",
        ["resource_id", "id"],
    )

    # TOPICS
    op.create_table(
        "topics",
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("slug"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("idx_topics_is_active", "topics", ["is_active"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_topics_is_active", table_name="topics")
    op.drop_table("topics")
    op.drop_index(
        "idx_resource_status_history_resource", table_name="resource_status_history"
    )
    op.drop_table("resource_status_history")
    op.drop_index("idx_resource_terms_field_value", table_name="resource_terms")
    op.drop_table("resource_terms")
    for name in (
        "idx_resources_resource_type",
        "idx_resources_language",
        "idx_resources_clicks",
        "idx_resources_publication_date",
        "idx_resources_status",
    ):
        op.drop_index(name, table_name="resources")
    op.drop_table("resources")
