# File: /alembic/versions/0001_document_view_tables.py | Version: 1.0 | Title: Document views, module properties & module records
"""document view tables"""

from alembic import op
import sqlalchemy as sa

revision = "docview_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "module_properties",
        sa.Column("pk", sa.String(), primary_key=True, nullable=False),
        sa.Column("module_id", sa.String(length=100), nullable=False),
        sa.Column("property_id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("property_type", sa.String(length=30), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=False),
        sa.Column("visible", sa.Boolean(), nullable=False),
        sa.Column("frozen", sa.Boolean(), nullable=False),
        sa.Column("required", sa.Boolean(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.UniqueConstraint("module_id", "property_id", name="uq_module_property"),
    )
    op.create_index("ix_module_properties_module_id", "module_properties", ["module_id"])

    op.create_table(
        "document_views",
        sa.Column("pk", sa.String(), primary_key=True, nullable=False),
        sa.Column("view_id", sa.String(length=100), nullable=False),
        sa.Column("module_id", sa.String(length=100), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("view_type", sa.String(length=20), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("visible_properties", sa.JSON(), nullable=False),
        sa.Column("group_by", sa.String(length=100), nullable=True),
        sa.Column("filters", sa.JSON(), nullable=False),
        sa.Column("sorts", sa.JSON(), nullable=False),
        sa.Column("config", sa.JSON(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.UniqueConstraint("module_id", "owner_id", "view_id", name="uq_view_module_owner"),
    )
    op.create_index("ix_document_views_scope", "document_views", ["module_id", "owner_id"])

    op.create_table(
        "module_records",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("module_id", sa.String(length=100), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.UniqueConstraint("module_id", "owner_id", "id", name="uq_module_record_owner"),
    )
    op.create_index("ix_module_records_scope", "module_records", ["module_id", "owner_id"])


def downgrade():
    op.drop_index("ix_module_records_scope", table_name="module_records")
    op.drop_table("module_records")
    op.drop_index("ix_document_views_scope", table_name="document_views")
    op.drop_table("document_views")
    op.drop_index("ix_module_properties_module_id", table_name="module_properties")
    op.drop_table("module_properties")
