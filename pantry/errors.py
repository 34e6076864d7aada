"""Exception types shared across the pantry package."""

from __future__ import annotations


class PantryError(Exception):
    """Base class for errors surfaced to callers of the pantry package."""


class ValidationError(PantryError, ValueError):
    """A pantry record failed validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class OCRError(PantryError):
    """The OCR engine failed to recognize text from an image."""


class OCRTimeoutError(OCRError):
    """The OCR engine did not finish within the allotted time."""


class EmptyReceiptError(PantryError):
    """OCR finished but produced no text."""
