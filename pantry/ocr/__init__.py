"""OCR engine base class, factory, and scoped engine lifecycle."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from ..errors import OCRError, OCRTimeoutError

if TYPE_CHECKING:
    from ..config import PantryConfig

logger = logging.getLogger(__name__)


class OCREngine(ABC):
    """Abstract base for turning a receipt image into raw text."""

    name = "ocr"

    @abstractmethod
    async def recognize(self, image: bytes) -> str:
        """Return the text recognized in ``image``, one receipt line per line."""
        ...

    async def close(self) -> None:
        """Release resources held by the engine."""


def create_engine(config: PantryConfig) -> OCREngine:
    """Create an OCR engine based on configuration."""
    backend_name = config.ocr.backend

    match backend_name:
        case "tesseract":
            from .tesseract import TesseractEngine

            return TesseractEngine(
                cmd=config.ocr.tesseract.cmd,
                psm=config.ocr.tesseract.psm,
            )
        case "claude":
            from .claude import ClaudeEngine

            return ClaudeEngine(
                api_key=config.ocr.claude.api_key,
                model=config.ocr.claude.model,
            )
        case "gemini":
            from .gemini import GeminiEngine

            return GeminiEngine(
                api_key=config.ocr.gemini.api_key,
                model=config.ocr.gemini.model,
            )
        case _:
            raise ValueError(
                f"Unknown OCR backend: {backend_name!r} "
                f"(choose from tesseract / claude / gemini)"
            )


@asynccontextmanager
async def open_engine(config: PantryConfig) -> AsyncIterator[OCREngine]:
    """Create an engine for the duration of a ``async with`` block.

    The engine is closed on exit whether the block succeeds or fails.
    """
    engine = create_engine(config)
    logger.info("OCR engine %s opened", engine.name)
    try:
        yield engine
    finally:
        try:
            await engine.close()
        except Exception:
            logger.warning("OCR engine %s failed to close", engine.name, exc_info=True)
        else:
            logger.info("OCR engine %s closed", engine.name)


async def recognize_text(
    engine: OCREngine, image: bytes, timeout: float | None = None
) -> str:
    """Run ``engine`` on ``image`` with an optional timeout in seconds.

    Raises:
        OCRTimeoutError: If recognition took longer than ``timeout``.
        OCRError: If the engine failed for any other reason, including a
            timeout raised by the engine itself.
    """
    if timeout is None:
        return await _recognize(engine, image)
    try:
        return await asyncio.wait_for(_recognize(engine, image), timeout=timeout)
    except asyncio.TimeoutError:
        raise OCRTimeoutError(
            f"OCR engine {engine.name} timed out after {timeout:g}s"
        ) from None


async def _recognize(engine: OCREngine, image: bytes) -> str:
    try:
        return await engine.recognize(image)
    except OCRError:
        raise
    except (ImportError, ValueError):
        raise
    except Exception as e:
        logger.exception("OCR engine %s failed", engine.name)
        raise OCRError(f"OCR engine {engine.name} failed: {e}") from e
