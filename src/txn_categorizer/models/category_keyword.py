"""Generic, language-tagged keywords mapped to categories."""

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from txn_categorizer.models.base import BaseModel
from txn_categorizer.models.enums import Language


class CategoryKeyword(BaseModel):
    """Informal vocabulary ("coffee", "cà phê") pointing at a category."""

    __tablename__ = "category_keywords"

    category_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    keyword: Mapped[str] = mapped_column(String(100), nullable=False)
    language: Mapped[Language] = mapped_column(
        Enum(Language, name="keyword_language", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    confidence: Mapped[int] = mapped_column(Integer, default=75, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("confidence BETWEEN 0 AND 100", name="ck_category_keywords_confidence"),
    )

    def __repr__(self) -> str:
        return (
            f"<CategoryKeyword(id={self.id}, keyword={self.keyword}, "
            f"language={self.language}, category_id={self.category_id})>"
        )
