"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "customers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("company_name", sa.String(300), nullable=False),
        sa.Column("tax_id", sa.String(13)),
        sa.Column("contact_name", sa.String(200)),
        sa.Column("contact_phone", sa.String(50)),
        sa.Column("address", sa.Text),
        sa.Column("approx_purchase_date", sa.String(50)),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "pins",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("pin", sa.String(6), nullable=False),
        sa.Column("first_name", sa.String(100)),
        sa.Column("last_name", sa.String(100)),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("signature_image", sa.Text),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_pins_pin", "pins", ["pin"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(300), nullable=False),
        sa.Column("sku", sa.String(100)),
        sa.Column("unit", sa.String(50)),
        sa.Column("dealer_price", sa.Numeric(14, 2), nullable=False),
        sa.Column("project_price", sa.Numeric(14, 2), nullable=False),
        sa.Column("user_price", sa.Numeric(14, 2), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "quotes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "customer_id",
            sa.String(36),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
        ),
        sa.Column("company_name", sa.String(300), nullable=False),
        sa.Column("system_name", sa.String(300), nullable=False),
        sa.Column("items", sa.JSON, nullable=False),
        sa.Column("total", sa.Numeric(14, 2), nullable=False),
        sa.Column("note", sa.Text),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_quotes_customer_id", "quotes", ["customer_id"])

    op.create_table(
        "quote_approvals",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "quote_id",
            sa.String(36),
            sa.ForeignKey("quotes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("requested_by", sa.String(200)),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("approved_by", sa.String(200)),
        sa.Column("approved_at", sa.DateTime(timezone=True)),
        sa.Column("telegram_chat_id", sa.BigInteger),
        sa.Column("telegram_message_id", sa.BigInteger),
    )
    op.create_index("ix_quote_approvals_quote_id", "quote_approvals", ["quote_id"])
    op.create_index("ix_quote_approvals_requested_at", "quote_approvals", ["requested_at"])


def downgrade():
    op.drop_index("ix_quote_approvals_requested_at", table_name="quote_approvals")
    op.drop_index("ix_quote_approvals_quote_id", table_name="quote_approvals")
    op.drop_table("quote_approvals")
    op.drop_index("ix_quotes_customer_id", table_name="quotes")
    op.drop_table("quotes")
    op.drop_table("products")
    op.drop_index("ix_pins_pin", table_name="pins")
    op.drop_table("pins")
    op.drop_table("customers")
