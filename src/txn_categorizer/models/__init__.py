"""Database models."""
from txn_categorizer.models.base import Base, BaseModel
from txn_categorizer.models.category_keyword import CategoryKeyword
from txn_categorizer.models.enums import Language, MatchType
from txn_categorizer.models.merchant_rule import MerchantCategoryRule
from txn_categorizer.models.user_mapping import UserCategoryMapping

__all__ = [
    "Base",
    "BaseModel",
    "CategoryKeyword",
    "Language",
    "MatchType",
    "MerchantCategoryRule",
    "UserCategoryMapping",
]
