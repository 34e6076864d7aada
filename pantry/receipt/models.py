"""Data types produced by the receipt text parser."""

from __future__ import annotations

from dataclasses import dataclass

from .vocabulary import DEFAULT_UNIT


@dataclass(frozen=True)
class CandidateItem:
    """A provisional food entry inferred from one receipt line."""

    name: str
    quantity: float = 1.0
    unit: str = DEFAULT_UNIT

    def display(self) -> str:
        qty = f"{self.quantity:g}"
        return f"{self.name} - {qty} {self.unit}"
