"""Receipt text parsing: raw OCR text to candidate pantry items."""

from .models import CandidateItem
from .parser import ReceiptParser, normalize_name, parse_receipt_text
from .vocabulary import DEFAULT_UNIT, EXCLUDED_KEYWORDS, UNITS

__all__ = [
    "CandidateItem",
    "ReceiptParser",
    "parse_receipt_text",
    "normalize_name",
    "EXCLUDED_KEYWORDS",
    "UNITS",
    "DEFAULT_UNIT",
]
