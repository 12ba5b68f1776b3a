"""User-specific description -> category mappings learned from corrections.

This is intentionally user-scoped (not global): one user's correction never
changes another user's suggestions.
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from txn_categorizer.models.base import BaseModel, utcnow


class UserCategoryMapping(BaseModel):
    """Learned category for a normalized description pattern of one user."""

    __tablename__ = "user_category_mappings"

    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description_pattern: Mapped[str] = mapped_column(String(500), nullable=False)
    category_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    confidence: Mapped[int] = mapped_column(Integer, default=95, nullable=False)
    usage_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    last_used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "description_pattern", name="uq_user_mapping_user_pattern"),
        Index("ix_user_mapping_user_usage", "user_id", "usage_count"),
        CheckConstraint("confidence BETWEEN 0 AND 100", name="ck_user_mapping_confidence"),
    )

    def __repr__(self) -> str:
        return (
            f"<UserCategoryMapping(id={self.id}, user_id={self.user_id}, "
            f"pattern={self.description_pattern}, category_id={self.category_id})>"
        )
