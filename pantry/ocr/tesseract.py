"""Local Tesseract OCR engine."""

from __future__ import annotations

import asyncio
import io
import logging

from . import OCREngine

logger = logging.getLogger(__name__)

# Images narrower than this are upscaled before recognition.
_MIN_WIDTH = 800


class TesseractEngine(OCREngine):
    """Recognize receipt text with a local Tesseract install via pytesseract."""

    name = "tesseract"

    def __init__(self, cmd: str = "", psm: int = 6) -> None:
        self._cmd = cmd
        self._psm = psm

    async def recognize(self, image: bytes) -> str:
        return await asyncio.to_thread(self._recognize_sync, image)

    def _recognize_sync(self, image: bytes) -> str:
        try:
            import pytesseract
            from PIL import Image
        except ImportError:
            raise ImportError(
                "pytesseract and Pillow are required: pip install 'pantry-tracker[tesseract]'"
            ) from None

        if self._cmd:
            pytesseract.pytesseract.tesseract_cmd = self._cmd

        img = Image.open(io.BytesIO(image))
        processed = preprocess_image(img)
        text = pytesseract.image_to_string(processed, config=f"--psm {self._psm}")
        logger.debug("tesseract recognized %d characters", len(text))
        return text


def preprocess_image(image):
    """Grayscale, upscale small images, and boost contrast for OCR."""
    from PIL import Image, ImageEnhance, ImageFilter

    img = image.convert("L")

    w, h = img.size
    if w < _MIN_WIDTH:
        scale = _MIN_WIDTH / w
        img = img.resize((int(w * scale), int(h * scale)), Image.Resampling.LANCZOS)

    img = ImageEnhance.Contrast(img).enhance(2.0)
    return img.filter(ImageFilter.SHARPEN)
