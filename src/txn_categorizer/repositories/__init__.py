"""Store protocols and their SQLAlchemy implementations."""
from txn_categorizer.repositories.interfaces import (
    KeywordStore,
    MerchantRuleStore,
    UserMappingStore,
)
from txn_categorizer.repositories.keyword import KeywordRepository
from txn_categorizer.repositories.merchant_rule import MerchantRuleRepository
from txn_categorizer.repositories.user_mapping import UserMappingRepository

__all__ = [
    "KeywordRepository",
    "KeywordStore",
    "MerchantRuleRepository",
    "MerchantRuleStore",
    "UserMappingRepository",
    "UserMappingStore",
]
