"""Locale-aware description normalization.

Every comparison the engine makes (rule patterns, keywords, learned user
patterns) happens between normalized strings, so matching is insensitive to
case, Vietnamese diacritics and irregular spacing.
"""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")


def remove_diacritics(text: str) -> str:
    """Strip combining marks: "Phở Hà Nội" -> "Pho Ha Noi".

    Decomposes to NFD, drops every nonspacing mark (category ``Mn``) and
    recomposes to NFC. Letters that are not composed with a combining mark
    (e.g. "đ") are left as they are.
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def normalize_description(text: str | None) -> str:
    """Normalize a description or pattern into its matching form.

    Lowercase, remove diacritics, collapse whitespace runs (tabs and newlines
    included) into single spaces, trim. Pure and idempotent.
    """
    if not text:
        return ""
    lowered = text.lower()
    return _WHITESPACE.sub(" ", remove_diacritics(lowered)).strip()
