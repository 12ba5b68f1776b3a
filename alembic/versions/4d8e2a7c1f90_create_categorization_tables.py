"""Create merchant rule, keyword and user mapping tables.

Revision ID: 4d8e2a7c1f90
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "4d8e2a7c1f90"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "merchant_category_rules",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("merchant_pattern", sa.String(length=255), nullable=False),
        sa.Column("match_type", sa.String(length=8), nullable=False, server_default="contains"),
        sa.Column("category_id", sa.BigInteger(), nullable=False),
        sa.Column("confidence", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("region", sa.String(length=10), nullable=False, server_default="VN"),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        *_audit_columns(),
        sa.CheckConstraint(
            "match_type IN ('exact', 'prefix', 'suffix', 'contains', 'regex')",
            name="match_type",
        ),
        sa.CheckConstraint("confidence BETWEEN 0 AND 100", name="ck_merchant_rules_confidence"),
    )
    op.create_index(
        "ix_merchant_category_rules_category_id", "merchant_category_rules", ["category_id"]
    )
    op.create_index(
        "ix_merchant_rules_region_active", "merchant_category_rules", ["region", "is_active"]
    )

    op.create_table(
        "category_keywords",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("category_id", sa.BigInteger(), nullable=False),
        sa.Column("keyword", sa.String(length=100), nullable=False),
        sa.Column("language", sa.String(length=2), nullable=False),
        sa.Column("confidence", sa.Integer(), nullable=False, server_default="75"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.CheckConstraint("language IN ('en', 'vi')", name="keyword_language"),
        sa.CheckConstraint("confidence BETWEEN 0 AND 100", name="ck_category_keywords_confidence"),
    )
    op.create_index("ix_category_keywords_category_id", "category_keywords", ["category_id"])
    op.create_index("ix_category_keywords_is_active", "category_keywords", ["is_active"])

    op.create_table(
        "user_category_mappings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("description_pattern", sa.String(length=500), nullable=False),
        sa.Column("category_id", sa.BigInteger(), nullable=False),
        sa.Column("confidence", sa.Integer(), nullable=False, server_default="95"),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "last_used_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        *_audit_columns(),
        sa.UniqueConstraint(
            "user_id", "description_pattern", name="uq_user_mapping_user_pattern"
        ),
        sa.CheckConstraint("confidence BETWEEN 0 AND 100", name="ck_user_mapping_confidence"),
    )
    op.create_index(
        "ix_user_mapping_user_usage", "user_category_mappings", ["user_id", "usage_count"]
    )


def downgrade() -> None:
    op.drop_index("ix_user_mapping_user_usage", table_name="user_category_mappings")
    op.drop_table("user_category_mappings")

    op.drop_index("ix_category_keywords_is_active", table_name="category_keywords")
    op.drop_index("ix_category_keywords_category_id", table_name="category_keywords")
    op.drop_table("category_keywords")

    op.drop_index("ix_merchant_rules_region_active", table_name="merchant_category_rules")
    op.drop_index("ix_merchant_category_rules_category_id", table_name="merchant_category_rules")
    op.drop_table("merchant_category_rules")
