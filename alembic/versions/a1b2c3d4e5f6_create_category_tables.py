"""Create locale and category tables.

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

Adds the category plugin schema:
- locales table for the i18n extension
- category_sets table
- categories and category_relations tables, created through the configured
  connector so that the i18n connector adds the (content_id, locale) index
"""

import sqlalchemy as sa

from alembic import op
from catlingo.categories.migration import CategoriesMigration, TableDefinition
from catlingo.config import get_settings
from catlingo.connectors import load_connector

# revision identifiers, used by Alembic.
revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def _define_categories(t: TableDefinition) -> None:
    t.references("category_sets", nullable=True)
    t.column("name", sa.String(255), nullable=False)
    t.column("description", sa.Text(), nullable=True)
    t.column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def _define_category_relations(t: TableDefinition) -> None:
    t.references("categories", nullable=False)
    t.column("related_object_type", sa.String(64), nullable=False)
    t.column("related_object_id", sa.Integer(), nullable=False)
    t.column("attr_name", sa.String(64), nullable=False)
    t.column("position", sa.Integer(), server_default="0", nullable=False)
    t.column("locale", sa.String(16), nullable=True)
    t.column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    # Create locales table
    op.create_table(
        "locales",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("iso_code", sa.String(16), nullable=False),
        sa.Column("native_name", sa.String(64), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("iso_code", name="uq_locales_iso_code"),
    )

    # Create category_sets table
    op.create_table(
        "category_sets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_editable", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key", name="uq_category_sets_key"),
    )

    # Category tables take their shape from the connector's migration hooks
    connector = load_connector(get_settings().categories_connector)
    connector.install()
    try:
        migration = CategoriesMigration(op)
        migration.create_categories_table(_define_categories)
        migration.create_category_relations_table(_define_category_relations)
    finally:
        connector.uninstall()

    op.create_index("idx_categories_set", "categories", ["category_set_id"])
    op.create_index(
        "idx_category_relations_object",
        "category_relations",
        ["related_object_type", "related_object_id", "attr_name"],
    )


def downgrade() -> None:
    op.drop_index("idx_category_relations_object", table_name="category_relations")
    op.drop_table("category_relations")
    op.drop_index("idx_categories_set", table_name="categories")
    op.drop_table("categories")
    op.drop_table("category_sets")
    op.drop_table("locales")
