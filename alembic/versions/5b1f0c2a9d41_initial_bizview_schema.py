"""initial_bizview_schema

Revision ID: 5b1f0c2a9d41
Revises:
Create Date: 2026-10-19 10:12:41.208113
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2a9d41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at():
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""

    # ACCOUNTS
    op.create_table(
        "businesses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_businesses_id", "businesses", ["id"])
    op.create_index("ix_businesses_name", "businesses", ["name"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        _created_at(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "account_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "business_id",
            sa.Integer(),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("taxes", sa.JSON(), nullable=False),
        sa.Column("payment_rates", sa.JSON(), nullable=False),
        sa.Column("platform_fees", sa.JSON(), nullable=False),
        sa.Column("default_profit_margin", sa.Numeric(6, 2), nullable=False),
        sa.Column("product_categories", sa.JSON(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_account_settings_id", "account_settings", ["id"])
    op.create_index("ix_account_settings_business_id", "account_settings", ["business_id"], unique=True)

    # INVENTORY
    op.create_table(
        "raw_materials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("cost", sa.Numeric(12, 4), nullable=False),
        sa.Column("supplier", sa.String(), nullable=True),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("min_stock", sa.Numeric(12, 3), nullable=False),
        _created_at(),
        sa.UniqueConstraint("business_id", "code", name="uq_business_raw_material_code"),
        sa.CheckConstraint("quantity >= 0", name="ck_raw_material_quantity_non_negative"),
        sa.CheckConstraint("min_stock >= 0", name="ck_raw_material_min_stock_non_negative"),
        sa.CheckConstraint("cost >= 0", name="ck_raw_material_cost_non_negative"),
    )
    op.create_index("ix_raw_materials_id", "raw_materials", ["id"])
    op.create_index("ix_raw_materials_business_id", "raw_materials", ["business_id"])
    op.create_index("ix_raw_materials_business", "raw_materials", ["business_id"])

    # PRODUCTS
    op.create_table(
        "finished_products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column("sku", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("final_cost", sa.Numeric(10, 2), nullable=False),
        sa.Column("sale_price", sa.Numeric(10, 2), nullable=False),
        _created_at(),
        sa.UniqueConstraint("business_id", "name", name="uq_business_finished_product_name"),
        sa.CheckConstraint("final_cost >= 0", name="ck_final_cost_non_negative"),
        sa.CheckConstraint("sale_price > 0", name="ck_sale_price_positive"),
    )
    op.create_index("ix_finished_products_id", "finished_products", ["id"])
    op.create_index("ix_finished_products_business_id", "finished_products", ["business_id"])
    op.create_index("ix_finished_products_business", "finished_products", ["business_id"])

    op.create_table(
        "recipe_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("finished_products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("raw_material_id", sa.Integer(), sa.ForeignKey("raw_materials.id"), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.UniqueConstraint("product_id", "raw_material_id", name="uq_recipe_product_material"),
        sa.CheckConstraint("quantity > 0", name="ck_recipe_quantity_positive"),
    )
    op.create_index("ix_recipe_items_id", "recipe_items", ["id"])
    op.create_index("ix_recipe_items_product_id", "recipe_items", ["product_id"])
    op.create_index("ix_recipe_items_raw_material_id", "recipe_items", ["raw_material_id"])

    op.create_table(
        "flavors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("finished_products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.UniqueConstraint("product_id", "name", name="uq_flavor_product_name"),
        sa.CheckConstraint("stock >= 0", name="ck_flavor_stock_non_negative"),
    )
    op.create_index("ix_flavors_id", "flavors", ["id"])
    op.create_index("ix_flavors_product_id", "flavors", ["product_id"])

    # SALES + PURCHASES
    op.create_table(
        "sales",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("finished_products.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "flavor_id",
            sa.Integer(),
            sa.ForeignKey("flavors.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("payment_method", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("commission", sa.Numeric(5, 2), nullable=True),
        _created_at(),
        sa.CheckConstraint("quantity > 0", name="ck_sale_quantity_positive"),
        sa.CheckConstraint("unit_price >= 0", name="ck_sale_unit_price_non_negative"),
        sa.CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('PIX', 'Card', 'Cash')",
            name="ck_sale_payment_method_valid",
        ),
    )
    op.create_index("ix_sales_id", "sales", ["id"])
    op.create_index("ix_sales_business_id", "sales", ["business_id"])
    op.create_index("ix_sales_product_id", "sales", ["product_id"])
    op.create_index("ix_sales_flavor_id", "sales", ["flavor_id"])
    op.create_index("ix_sales_date", "sales", ["date"])
    op.create_index("ix_sales_business_date", "sales", ["business_id", "date"])

    op.create_table(
        "purchases",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column(
            "raw_material_id",
            sa.Integer(),
            sa.ForeignKey("raw_materials.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit_cost", sa.Numeric(12, 4), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        _created_at(),
        sa.CheckConstraint("quantity > 0", name="ck_purchase_quantity_positive"),
        sa.CheckConstraint("unit_cost >= 0", name="ck_purchase_unit_cost_non_negative"),
    )
    op.create_index("ix_purchases_id", "purchases", ["id"])
    op.create_index("ix_purchases_business_id", "purchases", ["business_id"])
    op.create_index("ix_purchases_raw_material_id", "purchases", ["raw_material_id"])
    op.create_index("ix_purchases_date", "purchases", ["date"])
    op.create_index("ix_purchases_business_date", "purchases", ["business_id", "date"])

    # LEDGER
    op.create_table(
        "revenues",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("source", sa.String(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("payment_method", sa.String(), nullable=True),
        sa.Column(
            "sale_id",
            sa.Integer(),
            sa.ForeignKey("sales.id", ondelete="CASCADE"),
            nullable=True,
            unique=True,
        ),
        _created_at(),
        sa.CheckConstraint("amount >= 0", name="ck_revenue_amount_non_negative"),
        sa.CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('PIX', 'Card', 'Cash')",
            name="ck_revenue_payment_method_valid",
        ),
    )
    op.create_index("ix_revenues_id", "revenues", ["id"])
    op.create_index("ix_revenues_business_id", "revenues", ["business_id"])
    op.create_index("ix_revenues_date", "revenues", ["date"])
    op.create_index("ix_revenues_business_date", "revenues", ["business_id", "date"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("payment_method", sa.String(), nullable=True),
        _created_at(),
        sa.CheckConstraint("amount >= 0", name="ck_expense_amount_non_negative"),
        sa.CheckConstraint(
            "category IN ('Marketing', 'Sales', 'Software', 'Team', 'Other')",
            name="ck_expense_category_valid",
        ),
        sa.CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('PIX', 'Card', 'Cash')",
            name="ck_expense_payment_method_valid",
        ),
    )
    op.create_index("ix_expenses_id", "expenses", ["id"])
    op.create_index("ix_expenses_business_id", "expenses", ["business_id"])
    op.create_index("ix_expenses_date", "expenses", ["date"])
    op.create_index("ix_expenses_business_date", "expenses", ["business_id", "date"])

    # CALENDAR
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_id", sa.Integer(), sa.ForeignKey("businesses.id"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("attendees", sa.JSON(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_appointments_id", "appointments", ["id"])
    op.create_index("ix_appointments_business_id", "appointments", ["business_id"])
    op.create_index("ix_appointments_business_date", "appointments", ["business_id", "date"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("appointments")
    op.drop_table("expenses")
    op.drop_table("revenues")
    op.drop_table("purchases")
    op.drop_table("sales")
    op.drop_table("flavors")
    op.drop_table("recipe_items")
    op.drop_table("finished_products")
    op.drop_table("raw_materials")
    op.drop_table("account_settings")
    op.drop_table("users")
    op.drop_table("businesses")
