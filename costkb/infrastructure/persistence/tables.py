"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.types import JSON

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# RESOURCES TABLE
# ============================================================================
resources_table = Table(
    "resources",
    metadata,
    Column("id", String, primary_key=True),
    Column("slug", String(200), nullable=False, unique=True),
    Column("url", String, nullable=False, unique=True),
    Column("title", String(500), nullable=False),
    Column("description", Text, nullable=False),
    Column("description_locked", Boolean, nullable=False, default=False),
    Column("description_source", String(16), nullable=False),
    Column("tags", JSON, nullable=False),
    Column("resource_type", String(32), nullable=True),
    Column("country_programs", JSON, nullable=False),
    Column("themes", JSON, nullable=False),
    Column("oc4ids_alignment", JSON, nullable=False),
    Column("workstreams", JSON, nullable=False),
    Column("audience", JSON, nullable=False),
    Column("category", String, nullable=True),  # Legacy topic name
    Column("access_level", String(16), nullable=False),
    Column("language", String(8), nullable=False),
    Column("is_translation", Boolean, nullable=False, default=False),
    Column("canonical_id", String, nullable=True),
    Column("translations", JSON, nullable=False),
    Column("publication_date", DateTime(timezone=True), nullable=False),
    Column("last_verified", DateTime(timezone=True), nullable=False),
    Column("valid_until", DateTime(timezone=True), nullable=True),
    Column("status", String(32), nullable=False),  # ContentStatus as string
    Column("published_at", DateTime(timezone=True), nullable=True),
    Column("archived_at", DateTime(timezone=True), nullable=True),
    Column("archived_reason", Text, nullable=True),
    Column("clicks", Integer, nullable=False, default=0),
    Column("last_clicked_at", DateTime(timezone=True), nullable=True),
    Column("ai_citations", Integer, nullable=False, default=0),
    Column("embedding", JSON(none_as_null=True), nullable=True),
    Column("summary", Text, nullable=True),
    Column("source", String(16), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("created_by", String, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("updated_by", String, nullable=False),
    Column("search_text", Text, nullable=False),  # Lowercased title, description, tags, themes
)

Index("idx_resources_status", resources_table.c.status)
Index("idx_resources_publication_date", resources_table.c.publication_date)
Index("idx_resources_clicks", resources_table.c.clicks)
Index("idx_resources_language", resources_table.c.language)
Index("idx_resources_resource_type", resources_table.c.resource_type)


# ============================================================================
# RESOURCE TERMS TABLE (one row per array value, for any-of filters and facets)
# ============================================================================
resource_terms_table = Table(
    "resource_terms",
    metadata,
    Column(
        "resource_id",
        String,
        ForeignKey("resources.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("field", String(32), primary_key=True),  # tags, themes, country_programs, audience
    Column("value", String, primary_key=True),
)

Index("idx_resource_terms_field_value", resource_terms_table.c.field, resource_terms_table.c.value)


# ============================================================================
# RESOURCE STATUS HISTORY TABLE (append-only audit trail)
# ============================================================================
resource_status_history_table = Table(
    "resource_status_history",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "resource_id",
        String,
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", String(32), nullable=False),
    Column("changed_at", DateTime(timezone=True), nullable=False),
    Column("changed_by", String, nullable=False),
    Column("reason", Text, nullable=True),
)

Index(
    "idx_resource_status_history_resource",
    resource_status_history_table.c.resource_id,
    resource_status_history_table.c.id,
)


# ============================================================================
# TOPICS TABLE
# ============================================================================
topics_table = Table(
    "topics",
    metadata,
    Column("slug", String, primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", String(500), nullable=False, default=""),
    Column("display_order", Integer, nullable=False, default=0),
    Column("is_active", Boolean, nullable=False, default=True),
)

Index("idx_topics_is_active", topics_table.c.is_active)
