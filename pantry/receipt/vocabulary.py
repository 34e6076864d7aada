"""Keyword and unit tables used by the receipt text parser."""

from __future__ import annotations

# Lines containing any of these (case-insensitive substring) are receipt
# metadata, not purchasable items.
EXCLUDED_KEYWORDS: tuple[str, ...] = (
    "total",
    "subtotal",
    "tax",
    "change",
    "cash",
    "card",
    "payment",
    "receipt",
)

# Order matters: the first alternative that matches a whole token wins.
UNITS: tuple[str, ...] = (
    "kg",
    "g",
    "lb",
    "oz",
    "piece",
    "pcs",
    "pack",
    "ea",
)

DEFAULT_UNIT = "piece"

# Currency symbols recognized when stripping amounts like "$4.99".
CURRENCY_SYMBOLS: tuple[str, ...] = ("$", "€", "£", "¥")
