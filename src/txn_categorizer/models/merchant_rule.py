"""Curated merchant -> category rules, scoped by region.

Rules are maintained by administrators. The engine only reads them and bumps
``usage_count`` when a rule produces a suggestion.
"""

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from txn_categorizer.models.base import BaseModel
from txn_categorizer.models.enums import MatchType


class MerchantCategoryRule(BaseModel):
    """Pattern tying a brand/merchant string to a category."""

    __tablename__ = "merchant_category_rules"

    merchant_pattern: Mapped[str] = mapped_column(String(255), nullable=False)
    match_type: Mapped[MatchType] = mapped_column(
        Enum(MatchType, name="match_type", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        default=MatchType.contains,
        nullable=False,
    )
    category_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    confidence: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    region: Mapped[str] = mapped_column(String(10), default="VN", nullable=False)
    usage_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        Index("ix_merchant_rules_region_active", "region", "is_active"),
        CheckConstraint("confidence BETWEEN 0 AND 100", name="ck_merchant_rules_confidence"),
    )

    def __repr__(self) -> str:
        return (
            f"<MerchantCategoryRule(id={self.id}, pattern={self.merchant_pattern}, "
            f"match_type={self.match_type}, category_id={self.category_id})>"
        )
