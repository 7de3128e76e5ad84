"""
Display categories inferred from product names.

The same keyword table drives both the ``category`` filter and the category
facet, so the two can never disagree about where a product belongs.
"""
from enum import Enum
from typing import Optional

GOLD_BARS = "Gold Bars"
GOLD_COINS = "Gold Coins"
SPECIAL_EDITION = "Special Edition"

# Checked in order; the first keyword found in the name wins
CATEGORY_KEYWORDS = (
    ("bar", GOLD_BARS),
    ("coin", GOLD_COINS),
)


class CategoryFilter(str, Enum):
    """Values accepted by the ``category`` query parameter that narrow results."""
    BARS = "bars"
    COINS = "coins"

    @property
    def keyword(self) -> str:
        return "bar" if self is CategoryFilter.BARS else "coin"


def classify_category(name: Optional[str]) -> str:
    lowered = (name or "").lower()
    for keyword, category in CATEGORY_KEYWORDS:
        if keyword in lowered:
            return category
    return SPECIAL_EDITION
