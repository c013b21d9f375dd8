"""baseline ordering schema

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Users, roles, orders, items and the order/item join table.
Seeds the three role labels.
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_baseline"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    roles = op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(25), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_user_roles_name"),
    )

    op.create_table(
        "app_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(25), nullable=False),
        sa.Column("password", sa.String(256), nullable=False),
        sa.Column("first_name", sa.String(25), nullable=False),
        sa.Column("last_name", sa.String(25), nullable=False),
        sa.Column("email", sa.String(256), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["role_id"], ["user_roles.id"]),
        sa.UniqueConstraint("username", name="uq_app_users_username"),
        sa.UniqueConstraint("email", name="uq_app_users_email"),
    )

    op.create_table(
        "app_orders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customerid", sa.Integer(), nullable=False),
        sa.Column("status", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("location", sa.String(256), nullable=False),
        sa.Column("destination", sa.String(256), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["customerid"], ["app_users.id"]),
    )
    op.create_index("ix_app_orders_customerid", "app_orders", ["customerid"])

    op.create_table(
        "app_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("description", sa.String(256), nullable=False),
        sa.Column("cost", sa.Numeric(10, 2), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("cost >= 0", name="ck_app_items_cost_non_negative"),
        sa.CheckConstraint("amount >= 0", name="ck_app_items_amount_non_negative"),
    )

    op.create_table(
        "order_item_jc",
        sa.Column("orderid", sa.Integer(), nullable=False),
        sa.Column("itemid", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("orderid", "itemid"),
        sa.ForeignKeyConstraint(["orderid"], ["app_orders.id"]),
        sa.ForeignKeyConstraint(["itemid"], ["app_items.id"]),
    )
    op.create_index("ix_order_item_jc_itemid", "order_item_jc", ["itemid"])

    op.bulk_insert(
        roles,
        [{"name": "Admin"}, {"name": "User"}, {"name": "Locked"}],
    )


def downgrade() -> None:
    op.drop_index("ix_order_item_jc_itemid", table_name="order_item_jc")
    op.drop_table("order_item_jc")
    op.drop_table("app_items")
    op.drop_index("ix_app_orders_customerid", table_name="app_orders")
    op.drop_table("app_orders")
    op.drop_table("app_users")
    op.drop_table("user_roles")
