"""Heuristic extraction of food items from OCR'd receipt text."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable

from .models import CandidateItem
from .vocabulary import CURRENCY_SYMBOLS, DEFAULT_UNIT, EXCLUDED_KEYWORDS, UNITS

logger = logging.getLogger(__name__)

# Lines at or below this length never become fallback candidates.
_MIN_FALLBACK_LENGTH = 3

_NUMERIC_LINE = re.compile(r"^\d+(?:\.\d+)?$")
_WHITESPACE = re.compile(r"\s+")
_NAME_RUN = re.compile(r"[a-z\s]+", re.IGNORECASE)
_QUANTITY = re.compile(r"\d+(?:\.\d+)?")


def _currency_pattern(symbols: Iterable[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(s) for s in symbols)
    return re.compile(rf"(?:{alternatives})\d+[.,]\d+")


def _unit_pattern(units: Iterable[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(u) for u in units)
    return re.compile(rf"\s*(?P<unit>{alternatives})\b", re.IGNORECASE)


def normalize_name(raw: str) -> str:
    """Collapse whitespace and render as "First letter upper, rest lower"."""
    collapsed = _WHITESPACE.sub(" ", raw).strip()
    return collapsed[:1].upper() + collapsed[1:].lower()


class ReceiptParser:
    """Turns raw receipt text into an ordered list of candidate items.

    Each line is handled on its own:

    1. blank lines and lines containing an excluded keyword are skipped;
    2. a line with a name followed by a quantity (and optionally a unit)
       yields a structured candidate;
    3. any other line longer than three characters that is not a bare
       number yields a name-only candidate with quantity 1.

    Currency amounts such as ``$4.99`` are removed from names. Parsing never
    raises; lines that cannot be used are dropped.
    """

    def __init__(
        self,
        excluded_keywords: Iterable[str] = EXCLUDED_KEYWORDS,
        units: Iterable[str] = UNITS,
        currency_symbols: Iterable[str] = CURRENCY_SYMBOLS,
    ) -> None:
        self._excluded = tuple(k.lower() for k in excluded_keywords)
        self._units = tuple(u.lower() for u in units)
        self._unit_re = _unit_pattern(self._units)
        self._currency_re = _currency_pattern(currency_symbols)

    def parse(self, text: str) -> list[CandidateItem]:
        items: list[CandidateItem] = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            item = self.parse_line(line)
            if item is None:
                continue
            logger.debug("line %d -> %r", lineno, item)
            items.append(item)

        logger.debug("parsed %d candidate item(s)", len(items))
        return items

    def parse_line(self, line: str) -> CandidateItem | None:
        """Parse a single receipt line, or return None if it is not an item."""
        stripped = line.strip()
        if not stripped:
            return None

        if self._is_excluded(stripped):
            logger.debug("excluded: %r", stripped)
            return None

        found = self._find_item(stripped)
        if found is not None:
            return self._structured(*found)

        if len(stripped) > _MIN_FALLBACK_LENGTH and not _NUMERIC_LINE.match(stripped):
            return self._name_only(stripped)

        logger.debug("discarded: %r", stripped)
        return None

    def _is_excluded(self, line: str) -> bool:
        lowered = line.lower()
        return any(keyword in lowered for keyword in self._excluded)

    def _find_item(self, line: str) -> tuple[str, str, str | None] | None:
        """Return (name, quantity, unit) for the first "name quantity" pair.

        Each run of letters and spaces is visited once, so the cost stays
        linear in the length of the line.
        """
        for run in _NAME_RUN.finditer(line):
            text = run.group()
            name = text.rstrip()
            if not name or name == text:
                continue
            quantity = _QUANTITY.match(line, run.end())
            if quantity is None:
                continue
            unit = self._unit_re.match(line, quantity.end())
            return name, quantity.group(), unit.group("unit") if unit else None
        return None

    def _structured(
        self, raw_name: str, raw_quantity: str, unit: str | None
    ) -> CandidateItem:
        name = self._clean_name(raw_name)

        quantity = float(raw_quantity)
        if quantity <= 0 or math.isinf(quantity):
            quantity = 1.0

        return CandidateItem(
            name=name,
            quantity=quantity,
            unit=unit.lower() if unit else DEFAULT_UNIT,
        )

    def _name_only(self, line: str) -> CandidateItem | None:
        name = self._clean_name(line)
        if not name or _NUMERIC_LINE.match(name):
            logger.debug("nothing left after cleanup: %r", line)
            return None
        return CandidateItem(name=name)

    def _clean_name(self, raw: str) -> str:
        return normalize_name(self._currency_re.sub(" ", raw))


_default_parser = ReceiptParser()


def parse_receipt_text(text: str) -> list[CandidateItem]:
    """Parse raw OCR text with the default vocabularies."""
    return _default_parser.parse(text)
