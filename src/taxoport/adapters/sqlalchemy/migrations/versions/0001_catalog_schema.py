"""Catalog schema: namespaces, classification nodes, products and memberships.

Revision ID: 0001_catalog_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_catalog_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "namespace",
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("name", name=op.f("pk_namespace")),
    )
    op.create_table(
        "classification_node",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("usage_count", sa.Integer(), server_default="0", nullable=False),
        sa.ForeignKeyConstraint(
            ["namespace"],
            ["namespace.name"],
            name=op.f("fk_classification_node_namespace_namespace"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["parent_id"],
            ["classification_node.id"],
            name=op.f("fk_classification_node_parent_id_classification_node"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_classification_node")),
    )
    op.create_index(
        "ix_classification_node_namespace_name",
        "classification_node",
        ["namespace", "name"],
    )
    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sku", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_product")),
        sa.UniqueConstraint("sku", name=op.f("uq_product_product_sku")),
    )
    op.create_table(
        "product_classification",
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("node_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["node_id"],
            ["classification_node.id"],
            name=op.f("fk_product_classification_node_id_classification_node"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["product_id"],
            ["product.id"],
            name=op.f("fk_product_classification_product_id_product"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("product_id", "node_id", name=op.f("pk_product_classification")),
    )


def downgrade() -> None:
    op.drop_table("product_classification")
    op.drop_table("product")
    op.drop_index("ix_classification_node_namespace_name", table_name="classification_node")
    op.drop_table("classification_node")
    op.drop_table("namespace")
