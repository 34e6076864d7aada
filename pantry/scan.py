"""Receipt scanning: image -> OCR text -> candidate items -> pantry entries."""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from .errors import EmptyReceiptError
from .models import FoodItem, NewFoodItem
from .ocr import OCREngine, recognize_text
from .receipt import CandidateItem, ReceiptParser

if TYPE_CHECKING:
    from .config import ScanConfig
    from .db import PantryStorage

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    text: str
    candidates: list[CandidateItem] = field(default_factory=list)


@dataclass
class ScanDefaults:
    """Values filled in for fields a receipt line cannot provide."""

    category: str = "other"
    expiry_months: int = 1
    notes: str = "Added from scanned receipt"

    @classmethod
    def from_config(cls, config: ScanConfig) -> ScanDefaults:
        return cls(
            category=config.default_category,
            expiry_months=config.expiry_months,
            notes=config.notes,
        )


class ReceiptScanner:
    """Runs OCR on a receipt image and parses the text into candidates."""

    def __init__(
        self,
        engine: OCREngine,
        timeout: float | None = None,
        parser: ReceiptParser | None = None,
    ) -> None:
        self._engine = engine
        self._timeout = timeout
        self._parser = parser or ReceiptParser()

    async def scan(self, image: bytes) -> ScanResult:
        """Recognize and parse a receipt image.

        Raises:
            EmptyReceiptError: If OCR produced no text at all.
            OCRError: If the engine failed or timed out.
        """
        text = await recognize_text(self._engine, image, timeout=self._timeout)
        if not text.strip():
            raise EmptyReceiptError(
                "No text detected in the image. Please try a clearer image."
            )

        candidates = self._parser.parse(text)
        logger.info(
            "Receipt scanned: %d line(s), %d candidate item(s)",
            len(text.splitlines()), len(candidates),
        )
        return ScanResult(text=text, candidates=candidates)


def add_months(start: date, months: int) -> date:
    """Shift ``start`` by whole months, clamping to the end of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def candidate_to_new_item(
    candidate: CandidateItem,
    today: date | None = None,
    defaults: ScanDefaults | None = None,
) -> NewFoodItem:
    """Fill in expiration date, category and notes for a scanned candidate."""
    defaults = defaults or ScanDefaults()
    today = today or date.today()
    return NewFoodItem(
        name=candidate.name,
        category=defaults.category,
        quantity=candidate.quantity,
        unit=candidate.unit,
        expiration_date=add_months(today, defaults.expiry_months),
        notes=defaults.notes,
    )


def add_candidates(
    storage: PantryStorage,
    candidates: Iterable[CandidateItem],
    today: date | None = None,
    defaults: ScanDefaults | None = None,
) -> list[FoodItem]:
    """Store candidates as new pantry items, preserving their order."""
    new_items = [candidate_to_new_item(c, today, defaults) for c in candidates]
    stored = storage.create_food_items(new_items)
    logger.info("Added %d scanned item(s) to the pantry", len(stored))
    return stored
