"""create_inventory_tables

Revision ID: 3f9a1c2d7b44
Revises:
Create Date: 2026-10-19 09:12:41.508213
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2d7b44'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


item_condition = sa.Enum("excellent", "good", "fair", "poor", "damaged", name="item_condition")
transfer_status = sa.Enum("pending", "in_transit", "completed", "cancelled", name="transfer_status")
user_role = sa.Enum("admin", "user", name="user_role")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""

    # USERS / SESSIONS
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "sessions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"], unique=False)

    # REFERENCE TABLES
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("branch_code", sa.String(), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_locations_id", "locations", ["id"], unique=False)

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_categories_id", "categories", ["id"], unique=False)

    op.create_table(
        "suppliers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("contact_person", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_suppliers_id", "suppliers", ["id"], unique=False)

    # INVENTORY ITEMS
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("location_id", sa.Integer(), sa.ForeignKey("locations.id"), nullable=False),
        sa.Column("condition", item_condition, nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("purchase_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("purchase_date", sa.DateTime(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        sa.CheckConstraint("purchase_price >= 0", name="ck_inventory_purchase_price_non_negative"),
    )
    op.create_index("ix_inventory_items_id", "inventory_items", ["id"], unique=False)
    op.create_index("ix_inventory_items_item_code", "inventory_items", ["item_code"], unique=True)
    op.create_index("ix_inventory_items_category_id", "inventory_items", ["category_id"], unique=False)
    op.create_index("ix_inventory_items_location_id", "inventory_items", ["location_id"], unique=False)

    # PURCHASES
    op.create_table(
        "purchases",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("inventory_items.id"), nullable=False),
        sa.Column("supplier_id", sa.Integer(), sa.ForeignKey("suppliers.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("purchase_date", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="ck_purchase_quantity_positive"),
        sa.CheckConstraint("unit_price > 0", name="ck_purchase_unit_price_positive"),
    )
    op.create_index("ix_purchases_id", "purchases", ["id"], unique=False)
    op.create_index("ix_purchases_item_id", "purchases", ["item_id"], unique=False)
    op.create_index("ix_purchases_supplier_id", "purchases", ["supplier_id"], unique=False)
    op.create_index("ix_purchases_created_at", "purchases", ["created_at"], unique=False)

    # LOCATION HISTORY
    op.create_table(
        "location_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("inventory_items.id"), nullable=False),
        sa.Column("from_location_id", sa.Integer(), sa.ForeignKey("locations.id"), nullable=True),
        sa.Column("to_location_id", sa.Integer(), sa.ForeignKey("locations.id"), nullable=False),
        sa.Column("transfer_date", sa.DateTime(), nullable=False),
        sa.Column("transferred_by", sa.String(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("status", transfer_status, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_location_history_id", "location_history", ["id"], unique=False)
    op.create_index("ix_location_history_item_id", "location_history", ["item_id"], unique=False)
    op.create_index("ix_location_history_created_at", "location_history", ["created_at"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("location_history")
    op.drop_table("purchases")
    op.drop_table("inventory_items")
    op.drop_table("suppliers")
    op.drop_table("categories")
    op.drop_table("locations")
    op.drop_table("sessions")
    op.drop_table("users")

    bind = op.get_bind()
    transfer_status.drop(bind, checkfirst=True)
    item_condition.drop(bind, checkfirst=True)
    user_role.drop(bind, checkfirst=True)
