import enum


class MatchType(str, enum.Enum):
    exact = "exact"
    prefix = "prefix"
    suffix = "suffix"
    contains = "contains"
    regex = "regex"


class Language(str, enum.Enum):
    english = "en"
    vietnamese = "vi"
