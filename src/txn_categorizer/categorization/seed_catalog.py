"""Curated merchant brands and bilingual keywords for the Vietnam region.

Category ids live in an external category store, so the catalog is keyed by
category *name*; the builders take a name -> id map and silently skip
categories the map does not contain.
"""

from collections.abc import Mapping

from txn_categorizer.models.category_keyword import CategoryKeyword
from txn_categorizer.models.enums import Language, MatchType
from txn_categorizer.models.merchant_rule import MerchantCategoryRule

FOOD = "Food and Beverage"
TRANSPORTATION = "Transportation"
SHOPPING = "Shopping"
ENTERTAINMENT = "Entertainment"
HEALTH = "Health & Fitness"
UTILITIES = "Bills & Utilities"
EDUCATION = "Education"
SALARY = "Salary"

CATEGORY_NAMES = (FOOD, TRANSPORTATION, SHOPPING, ENTERTAINMENT, HEALTH, UTILITIES, EDUCATION, SALARY)

MERCHANT_RULE_CONFIDENCE = 100

MERCHANT_BRANDS: dict[str, list[str]] = {
    FOOD: [
        # Coffee chains
        "Highlands Coffee", "Starbucks", "The Coffee House", "Phuc Long",
        "Cong Caphe", "Trung Nguyen", "Passio Coffee", "Urban Station",
        "Cafe Amazon", "Milano Coffee", "Kafe", "Cong Ca Phe",
        # Fast food
        "KFC", "Lotteria", "Jollibee", "Pizza Hut", "Domino's",
        "McDonald's", "Burger King", "Popeyes", "Texas Chicken",
    ],
    TRANSPORTATION: [
        "Grab", "Be", "Gojek", "Xanh SM", "Mai Linh", "Vinasun",
        "Grabbike", "Grabcar", "Grabfood", "Befood", "Becar", "Bebike",
    ],
    SHOPPING: [
        # Convenience stores
        "Circle K", "Ministop", "GS25", "Family Mart", "B's Mart",
        "7-Eleven", "Shop&Go", "VinMart+",
        # Supermarkets
        "VinMart", "Co.opmart", "Lotte Mart", "Big C", "Aeon", "Mega Market",
        "Emart", "Tops Market", "Satra", "Maximark",
        # E-commerce and electronics
        "Shopee", "Lazada", "Tiki", "Sendo", "FPT Shop",
        "The Gioi Di Dong", "Dien May Xanh", "CellphoneS", "Nguyen Kim",
    ],
    ENTERTAINMENT: [
        "CGV", "Galaxy Cinema", "Lotte Cinema", "BHD Star",
        "Netflix", "Spotify", "YouTube Premium",
    ],
    HEALTH: [
        "Phong Kham", "Benh Vien", "Hospital", "Pharmacy", "Nha Thuoc",
        "Guardian", "Pharmacity", "Medicare", "California Fitness",
        "Gym", "Yoga", "Fitness",
    ],
    UTILITIES: [
        "EVN HCM", "EVN", "Sawaco", "VNPT", "Viettel", "FPT Telecom",
        "MobiFone", "VinaPhone", "Dien Luc", "Cap Nuoc",
    ],
}

# Brands too short for a substring rule; "be" would also hit "benh vien" or "beer".
MERCHANT_PATTERN_OVERRIDES: dict[str, tuple[str, MatchType]] = {
    "Be": (r"\bbe\b", MatchType.regex),
}

# category -> (vietnamese confidence, english confidence)
KEYWORD_CONFIDENCE: dict[str, tuple[int, int]] = {
    FOOD: (85, 80),
    SALARY: (90, 85),
}
DEFAULT_KEYWORD_CONFIDENCE = (80, 75)

KEYWORDS: dict[str, dict[Language, list[str]]] = {
    FOOD: {
        Language.vietnamese: [
            "ca phe", "com", "pho", "bun", "banh mi", "quan an", "nha hang",
            "an sang", "an trua", "an toi", "do uong", "tra sua",
        ],
        Language.english: [
            "coffee", "cafe", "restaurant", "food", "drink", "breakfast",
            "lunch", "dinner", "meal", "pizza", "burger",
        ],
    },
    TRANSPORTATION: {
        Language.vietnamese: ["xe", "taxi", "xe om", "xe buyt", "xe may", "dau xe", "xang"],
        Language.english: ["ride", "transport", "fuel", "gas", "parking", "toll", "bus", "metro"],
    },
    SHOPPING: {
        Language.vietnamese: ["mua", "mua sam", "sieu thi", "cua hang", "shop", "quan ao", "giay dep"],
        Language.english: [
            "shopping", "store", "market", "mall", "clothes", "shoes",
            "electronics", "purchase",
        ],
    },
    ENTERTAINMENT: {
        Language.vietnamese: ["phim", "rap", "xem phim", "game", "karaoke"],
        Language.english: ["movie", "cinema", "film", "concert", "ticket", "streaming"],
    },
    HEALTH: {
        Language.vietnamese: [
            "benh vien", "phong kham", "bac si", "thuoc", "kham benh", "tap gym", "the thao",
        ],
        Language.english: [
            "hospital", "clinic", "doctor", "medicine", "pharmacy", "gym", "fitness", "yoga",
        ],
    },
    UTILITIES: {
        Language.vietnamese: ["dien", "nuoc", "internet", "dien thoai", "tien dien", "tien nuoc"],
        Language.english: ["electricity", "water", "utility", "bill", "phone", "telecom"],
    },
    EDUCATION: {
        Language.vietnamese: ["hoc", "truong", "hoc phi", "khoa hoc"],
        Language.english: ["school", "education", "course", "tuition", "book"],
    },
    SALARY: {
        Language.vietnamese: ["luong", "tien luong"],
        Language.english: ["salary", "wage", "payroll"],
    },
}


def keyword_confidence(category_name: str, language: Language) -> int:
    """Vietnamese keywords score slightly higher than their English equivalents."""
    vietnamese, english = KEYWORD_CONFIDENCE.get(category_name, DEFAULT_KEYWORD_CONFIDENCE)
    return vietnamese if language == Language.vietnamese else english


def build_merchant_rules(
    category_ids: Mapping[str, int], region: str = "VN"
) -> list[MerchantCategoryRule]:
    """Rules at confidence 100 for every brand of a mapped category.

    Brands become contains-rules unless MERCHANT_PATTERN_OVERRIDES says otherwise.
    """
    rules: list[MerchantCategoryRule] = []
    for category_name, brands in MERCHANT_BRANDS.items():
        category_id = category_ids.get(category_name)
        if category_id is None:
            continue
        for brand in brands:
            pattern, match_type = MERCHANT_PATTERN_OVERRIDES.get(brand, (brand, MatchType.contains))
            rules.append(
                MerchantCategoryRule(
                    merchant_pattern=pattern,
                    match_type=match_type,
                    category_id=category_id,
                    confidence=MERCHANT_RULE_CONFIDENCE,
                    region=region,
                    is_active=True,
                    usage_count=0,
                )
            )
    return rules


def build_category_keywords(category_ids: Mapping[str, int]) -> list[CategoryKeyword]:
    """Keyword rows for every mapped category, in both languages."""
    keywords: list[CategoryKeyword] = []
    for category_name, by_language in KEYWORDS.items():
        category_id = category_ids.get(category_name)
        if category_id is None:
            continue
        for language, words in by_language.items():
            confidence = keyword_confidence(category_name, language)
            for word in words:
                keywords.append(
                    CategoryKeyword(
                        category_id=category_id,
                        keyword=word,
                        language=language,
                        confidence=confidence,
                        is_active=True,
                    )
                )
    return keywords
