"""
Price text helpers shared by the cart, listing and product detail pages.

The storefront renders prices as "$1,299.99", "Total: $102.99" or plain
"49.00"; these helpers pull a number out of any of them.
"""

import re
from typing import Optional

PRICE_PATTERN = re.compile(r"[\d,]+(?:\.\d+)?")
DOLLAR_PATTERN = re.compile(r"\$[\d,.]+")


def parse_price(text: Optional[str]) -> float:
    """
    First price-looking number in `text`, 0.0 when there is none.

    >>> parse_price("Total: $1,299.99")
    1299.99
    """
    if not text:
        return 0.0
    match = PRICE_PATTERN.search(text)
    if not match:
        return 0.0
    try:
        return float(match.group().replace(",", ""))
    except ValueError:
        return 0.0


def extract_price(text: Optional[str], default: str = "0.00") -> str:
    """Digits and dot only ("$1,299.99" -> "1299.99"), `default` when nothing is left."""
    if not text:
        return default
    cleaned = re.sub(r"[^0-9.]", "", text)
    return cleaned or default


def find_dollar_amount(text: Optional[str]) -> str:
    """The first "$x.xx" token in `text`, or ''."""
    if not text:
        return ""
    match = DOLLAR_PATTERN.search(text)
    return match.group() if match else ""


__all__ = [
    "parse_price",
    "extract_price",
    "find_dollar_amount",
]
